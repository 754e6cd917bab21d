"""Email threads."""

from __future__ import annotations

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service
from nylasclient.resources.common import Participant


class MessageRef(Record):
    id: str
    subject: str | None = None


class Thread(Record):
    id: str
    grant_id: str = ""
    latest_draft_or_message: MessageRef | None = None
    has_attachments: bool = False
    has_drafts: bool = False
    starred: bool = False
    unread: bool = False
    earliest_message_date: int | None = None
    latest_message_date: int | None = None
    message_ids: list[str] = Field(default_factory=list)
    draft_ids: list[str] = Field(default_factory=list)
    participants: list[Participant] = Field(default_factory=list)
    snippet: str | None = None
    subject: str | None = None
    folders: list[str] = Field(default_factory=list)


class ThreadListOptions(ListOptions):
    subject: str | None = None
    any_email: list[str] | None = None
    from_: str | None = Field(None, alias="from")
    to: str | None = None
    in_: str | None = Field(None, alias="in")
    unread: bool | None = None
    starred: bool | None = None
    latest_message_after: int | None = None
    latest_message_before: int | None = None
    has_attachment: bool | None = None
    search_query_native: str | None = None


class UpdateThreadRequest(RequestBody):
    unread: bool | None = None
    starred: bool | None = None
    folders: list[str] | None = None


class ThreadsService(Service):
    def list(
        self,
        grant_id: str,
        options: ThreadListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Thread]:
        return self._page(
            f"/v3/grants/{grant_id}/threads", Thread, options,
            op="threads.list", ctx=ctx,
        )

    def list_all(
        self,
        grant_id: str,
        options: ThreadListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Thread]:
        return self._all(
            f"/v3/grants/{grant_id}/threads", Thread, options,
            op="threads.list_all", ctx=ctx,
        )

    def get(self, grant_id: str, thread_id: str, *, ctx: Context | None = None) -> Thread:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/threads/{thread_id}", Thread,
            op=f"threads.get({thread_id})", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        thread_id: str,
        request: UpdateThreadRequest,
        *,
        ctx: Context | None = None,
    ) -> Thread:
        """Apply read/starred/folder changes to every message in the thread."""
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/threads/{thread_id}", Thread,
            body=request, op=f"threads.update({thread_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, thread_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/threads/{thread_id}",
            op=f"threads.delete({thread_id})", ctx=ctx,
        )
