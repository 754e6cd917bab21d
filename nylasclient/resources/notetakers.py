"""Meeting notetaker bots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service


class MeetingSettings(RequestBody):
    video_recording: bool | None = None
    audio_recording: bool | None = None
    transcription: bool | None = None
    summary: bool | None = None
    action_items: bool | None = None
    leave_after_silence_seconds: int | None = None


class Notetaker(Record):
    id: str = ""
    name: str | None = None
    join_time: int | None = None
    meeting_link: str | None = None
    meeting_provider: str | None = None
    state: str | None = None
    meeting_settings: MeetingSettings | None = None
    created_at: int | None = None
    updated_at: int | None = None

    @property
    def joins_at(self) -> datetime | None:
        if not self.join_time:
            return None
        return datetime.fromtimestamp(self.join_time, tz=timezone.utc)


class NotetakerListOptions(ListOptions):
    state: str | None = None


class CreateNotetakerRequest(RequestBody):
    meeting_link: str
    join_time: int | None = None
    name: str | None = None
    meeting_settings: MeetingSettings | None = None


class HistoryEvent(Record):
    created_at: int | None = None
    event_type: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class NotetakerHistory(Record):
    events: list[HistoryEvent] = Field(default_factory=list)


class NotetakerMedia(Record):
    id: str = ""
    type: str | None = None
    url: str | None = None
    status: str | None = None
    expires_at: int | None = None
    content_type: str | None = None


class NotetakersService(Service):
    def list(
        self,
        grant_id: str,
        options: NotetakerListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Notetaker]:
        return self._page(
            f"/v3/grants/{grant_id}/notetakers", Notetaker, options,
            op="notetakers.list", ctx=ctx,
        )

    def list_all(
        self,
        grant_id: str,
        options: NotetakerListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Notetaker]:
        return self._all(
            f"/v3/grants/{grant_id}/notetakers", Notetaker, options,
            op="notetakers.list_all", ctx=ctx,
        )

    def get(self, grant_id: str, notetaker_id: str, *, ctx: Context | None = None) -> Notetaker:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/notetakers/{notetaker_id}", Notetaker,
            op=f"notetakers.get({notetaker_id})", ctx=ctx,
        )

    def create(
        self, grant_id: str, request: CreateNotetakerRequest, *, ctx: Context | None = None
    ) -> Notetaker:
        """Schedule a bot to join a meeting; it joins immediately without ``join_time``."""
        return self._one(
            "POST", f"/v3/grants/{grant_id}/notetakers", Notetaker,
            body=request, op="notetakers.create", ctx=ctx,
        )

    def cancel(self, grant_id: str, notetaker_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/notetakers/{notetaker_id}/cancel",
            op=f"notetakers.cancel({notetaker_id})", ctx=ctx,
        )

    def leave(self, grant_id: str, notetaker_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "POST", f"/v3/grants/{grant_id}/notetakers/{notetaker_id}/leave",
            op=f"notetakers.leave({notetaker_id})", ctx=ctx,
        )

    def history(
        self, grant_id: str, notetaker_id: str, *, ctx: Context | None = None
    ) -> NotetakerHistory:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/notetakers/{notetaker_id}/history",
            NotetakerHistory, op=f"notetakers.history({notetaker_id})", ctx=ctx,
        )

    def media(
        self, grant_id: str, notetaker_id: str, *, ctx: Context | None = None
    ) -> list[NotetakerMedia]:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/notetakers/{notetaker_id}/media",
            list[NotetakerMedia], op=f"notetakers.media({notetaker_id})", ctx=ctx,
        )
