"""Email messages."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service
from nylasclient.resources.common import AttachmentInfo, Participant


class Message(Record):
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
    unread: bool = False
    starred: bool = False
    folders: list[str] = Field(default_factory=list)
    attachments: list[AttachmentInfo] = Field(default_factory=list)
    created_at: int | None = None


class MessageListOptions(ListOptions):
    subject: str | None = None
    any_email: list[str] | None = None
    from_: str | None = Field(None, alias="from")
    to: str | None = None
    cc: str | None = None
    bcc: str | None = None
    in_: str | None = Field(None, alias="in")
    unread: bool | None = None
    starred: bool | None = None
    thread_id: str | None = None
    received_after: int | None = None
    received_before: int | None = None
    has_attachment: bool | None = None
    fields: str | None = None
    search_query_native: str | None = None


class SendMessageRequest(RequestBody):
    to: list[Participant]
    from_: list[Participant] | None = Field(None, alias="from")
    cc: list[Participant] | None = None
    bcc: list[Participant] | None = None
    reply_to: list[Participant] | None = None
    subject: str | None = None
    body: str | None = None
    reply_to_message_id: str | None = None
    send_at: int | None = None
    tracking_options: dict[str, Any] | None = None


class UpdateMessageRequest(RequestBody):
    unread: bool | None = None
    starred: bool | None = None
    folders: list[str] | None = None


class ScheduledMessage(Record):
    schedule_id: str
    status: Any = None
    close_time: int | None = None


class CleanMessagesRequest(RequestBody):
    message_id: list[str]
    ignore_links: bool | None = None
    ignore_images: bool | None = None
    ignore_tables: bool | None = None
    images_as_markdown: bool | None = None
    remove_conclusion_phrases: bool | None = None


class CleanedMessage(Record):
    id: str = ""
    grant_id: str = ""
    conversation: str | None = None
    message_id: str | None = None


class MessagesService(Service):
    def list(
        self,
        grant_id: str,
        options: MessageListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Message]:
        return self._page(
            f"/v3/grants/{grant_id}/messages", Message, options,
            op="messages.list", ctx=ctx,
        )

    def list_all(
        self,
        grant_id: str,
        options: MessageListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Message]:
        return self._all(
            f"/v3/grants/{grant_id}/messages", Message, options,
            op="messages.list_all", ctx=ctx,
        )

    def get(self, grant_id: str, message_id: str, *, ctx: Context | None = None) -> Message:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/messages/{message_id}", Message,
            op=f"messages.get({message_id})", ctx=ctx,
        )

    def send(
        self, grant_id: str, request: SendMessageRequest, *, ctx: Context | None = None
    ) -> Message:
        """Send a message now, or at ``send_at`` when it is set."""
        return self._one(
            "POST", f"/v3/grants/{grant_id}/messages/send", Message,
            body=request, op="messages.send", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        message_id: str,
        request: UpdateMessageRequest,
        *,
        ctx: Context | None = None,
    ) -> Message:
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/messages/{message_id}", Message,
            body=request, op=f"messages.update({message_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, message_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/messages/{message_id}",
            op=f"messages.delete({message_id})", ctx=ctx,
        )

    def list_scheduled(
        self, grant_id: str, *, ctx: Context | None = None
    ) -> list[ScheduledMessage]:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/messages/schedules", list[ScheduledMessage],
            op="messages.list_scheduled", ctx=ctx,
        )

    def get_scheduled(
        self, grant_id: str, schedule_id: str, *, ctx: Context | None = None
    ) -> ScheduledMessage:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/messages/schedules/{schedule_id}",
            ScheduledMessage, op=f"messages.get_scheduled({schedule_id})", ctx=ctx,
        )

    def stop_scheduled(
        self, grant_id: str, schedule_id: str, *, ctx: Context | None = None
    ) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/messages/schedules/{schedule_id}",
            op=f"messages.stop_scheduled({schedule_id})", ctx=ctx,
        )

    def clean(
        self, grant_id: str, request: CleanMessagesRequest, *, ctx: Context | None = None
    ) -> list[CleanedMessage]:
        """Strip quoted text, signatures and similar noise from messages."""
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/messages/clean", list[CleanedMessage],
            body=request, op="messages.clean", ctx=ctx,
        )
