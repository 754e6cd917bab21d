"""Attachment metadata."""

from __future__ import annotations

from nylasclient.context import Context
from nylasclient.resources.base import Service
from nylasclient.resources.common import AttachmentInfo


class AttachmentsService(Service):
    def get(
        self,
        grant_id: str,
        attachment_id: str,
        message_id: str,
        *,
        ctx: Context | None = None,
    ) -> AttachmentInfo:
        """Metadata for one attachment of *message_id*."""
        return self._one(
            "GET", f"/v3/grants/{grant_id}/attachments/{attachment_id}", AttachmentInfo,
            params={"message_id": message_id},
            op=f"attachments.get({attachment_id})", ctx=ctx,
        )
