"""Records shared by several resources."""

from __future__ import annotations

from nylasclient.models import Record, RequestBody


class Participant(RequestBody):
    email: str
    name: str | None = None


class AttachmentInfo(Record):
    id: str = ""
    filename: str = ""
    content_type: str = ""
    size: int = 0
    content_id: str | None = None
    is_inline: bool = False
