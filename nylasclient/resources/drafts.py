"""Email drafts."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service
from nylasclient.resources.common import AttachmentInfo, Participant


class Draft(Record):
    id: str
    grant_id: str = ""
    thread_id: str | None = None
    subject: str | None = None
    from_: list[Participant] = Field(default_factory=list, alias="from")
    to: list[Participant] = Field(default_factory=list)
    cc: list[Participant] = Field(default_factory=list)
    bcc: list[Participant] = Field(default_factory=list)
    reply_to: list[Participant] = Field(default_factory=list)
    date: int | None = None
    body: str | None = None
    snippet: str | None = None
    starred: bool = False
    folders: list[str] = Field(default_factory=list)
    attachments: list[AttachmentInfo] = Field(default_factory=list)
    created_at: int | None = None


class DraftListOptions(ListOptions):
    subject: str | None = None
    any_email: list[str] | None = None
    to: str | None = None
    cc: str | None = None
    bcc: str | None = None
    unread: bool | None = None
    starred: bool | None = None
    thread_id: str | None = None
    has_attachment: bool | None = None


class DraftRequest(RequestBody):
    """Body for both creating and updating a draft; unset fields are left alone."""

    subject: str | None = None
    body: str | None = None
    from_: list[Participant] | None = Field(None, alias="from")
    to: list[Participant] | None = None
    cc: list[Participant] | None = None
    bcc: list[Participant] | None = None
    reply_to: list[Participant] | None = None
    reply_to_message_id: str | None = None
    starred: bool | None = None
    tracking_options: dict[str, Any] | None = None


class DraftsService(Service):
    def list(
        self,
        grant_id: str,
        options: DraftListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Draft]:
        return self._page(
            f"/v3/grants/{grant_id}/drafts", Draft, options,
            op="drafts.list", ctx=ctx,
        )

    def list_all(
        self,
        grant_id: str,
        options: DraftListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Draft]:
        return self._all(
            f"/v3/grants/{grant_id}/drafts", Draft, options,
            op="drafts.list_all", ctx=ctx,
        )

    def get(self, grant_id: str, draft_id: str, *, ctx: Context | None = None) -> Draft:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/drafts/{draft_id}", Draft,
            op=f"drafts.get({draft_id})", ctx=ctx,
        )

    def create(
        self, grant_id: str, request: DraftRequest, *, ctx: Context | None = None
    ) -> Draft:
        return self._one(
            "POST", f"/v3/grants/{grant_id}/drafts", Draft,
            body=request, op="drafts.create", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        draft_id: str,
        request: DraftRequest,
        *,
        ctx: Context | None = None,
    ) -> Draft:
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/drafts/{draft_id}", Draft,
            body=request, op=f"drafts.update({draft_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, draft_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/drafts/{draft_id}",
            op=f"drafts.delete({draft_id})", ctx=ctx,
        )

    def send(self, grant_id: str, draft_id: str, *, ctx: Context | None = None) -> Draft:
        """Send an existing draft; the API returns the sent message."""
        return self._one(
            "POST", f"/v3/grants/{grant_id}/drafts/{draft_id}", Draft,
            op=f"drafts.send({draft_id})", ctx=ctx,
        )
