"""Calendar events, RSVPs and event import."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service
from nylasclient.resources.common import Participant


class When(Record):
    """Event timing. Which fields are set depends on ``object``.

    ``timespan`` uses start/end times, ``date`` a single day, ``datespan``
    a range of days and ``time`` a single instant.
    """

    object: str | None = None
    start_time: int | None = None
    end_time: int | None = None
    start_timezone: str | None = None
    end_timezone: str | None = None
    date: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    time: int | None = None
    timezone: str | None = None


class EventParticipant(Record):
    email: str
    name: str | None = None
    status: str | None = None
    comment: str | None = None
    phone_number: str | None = None


class Event(Record):
    id: str
    grant_id: str = ""
    calendar_id: str = ""
    title: str | None = None
    description: str | None = None
    location: str | None = None
    when: When | None = None
    participants: list[EventParticipant] = Field(default_factory=list)
    status: str | None = None
    busy: bool = False
    visibility: str | None = None
    conferencing: dict[str, Any] | None = None
    reminders: dict[str, Any] | None = None
    recurrence: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    organizer: Participant | None = None
    master_event_id: str | None = None
    ical_uid: str | None = None
    html_link: str | None = None
    read_only: bool = False
    created_at: int | None = None
    updated_at: int | None = None


class EventListOptions(ListOptions):
    calendar_id: str
    start: int | None = None
    end: int | None = None
    expand_recurring: bool | None = None
    show_cancelled: bool | None = None
    busy: bool | None = None
    title: str | None = None
    description: str | None = None
    location: str | None = None
    attendees: list[str] | None = None
    master_event_id: str | None = None
    ical_uid: str | None = None
    updated_after: int | None = None
    updated_before: int | None = None
    metadata_pair: str | None = None


class EventRequest(RequestBody):
    when: dict[str, Any] | None = None
    title: str | None = None
    description: str | None = None
    location: str | None = None
    participants: list[dict[str, Any]] | None = None
    busy: bool | None = None
    visibility: str | None = None
    conferencing: dict[str, Any] | None = None
    reminders: dict[str, Any] | None = None
    recurrence: list[str] | None = None
    metadata: dict[str, str] | None = None


class RSVPRequest(RequestBody):
    status: str
    comment: str | None = None


class ImportEventsOptions(ListOptions):
    calendar_id: str
    start: int | None = None
    end: int | None = None


class EventsService(Service):
    def list(
        self, grant_id: str, options: EventListOptions, *, ctx: Context | None = None
    ) -> ListResponse[Event]:
        return self._page(
            f"/v3/grants/{grant_id}/events", Event, options,
            op="events.list", ctx=ctx,
        )

    def list_all(
        self, grant_id: str, options: EventListOptions, *, ctx: Context | None = None
    ) -> Iterator[Event]:
        return self._all(
            f"/v3/grants/{grant_id}/events", Event, options,
            op="events.list_all", ctx=ctx,
        )

    def get(
        self,
        grant_id: str,
        event_id: str,
        calendar_id: str,
        *,
        ctx: Context | None = None,
    ) -> Event:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/events/{event_id}", Event,
            params={"calendar_id": calendar_id},
            op=f"events.get({event_id})", ctx=ctx,
        )

    def create(
        self,
        grant_id: str,
        calendar_id: str,
        request: EventRequest,
        *,
        notify_participants: bool | None = None,
        ctx: Context | None = None,
    ) -> Event:
        params: dict[str, Any] = {"calendar_id": calendar_id}
        if notify_participants is not None:
            params["notify_participants"] = notify_participants
        return self._one(
            "POST", f"/v3/grants/{grant_id}/events", Event,
            body=request, params=params, op="events.create", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        event_id: str,
        calendar_id: str,
        request: EventRequest,
        *,
        notify_participants: bool | None = None,
        ctx: Context | None = None,
    ) -> Event:
        params: dict[str, Any] = {"calendar_id": calendar_id}
        if notify_participants is not None:
            params["notify_participants"] = notify_participants
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/events/{event_id}", Event,
            body=request, params=params, op=f"events.update({event_id})", ctx=ctx,
        )

    def delete(
        self,
        grant_id: str,
        event_id: str,
        calendar_id: str,
        *,
        ctx: Context | None = None,
    ) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/events/{event_id}",
            params={"calendar_id": calendar_id},
            op=f"events.delete({event_id})", ctx=ctx,
        )

    def send_rsvp(
        self,
        grant_id: str,
        event_id: str,
        calendar_id: str,
        request: RSVPRequest,
        *,
        ctx: Context | None = None,
    ) -> None:
        """Reply to an invitation with ``yes``, ``no`` or ``maybe``."""
        return self._no_content(
            "POST", f"/v3/grants/{grant_id}/events/{event_id}/send-rsvp",
            body=request, params={"calendar_id": calendar_id},
            op=f"events.send_rsvp({event_id})", ctx=ctx,
        )

    def import_events(
        self, grant_id: str, options: ImportEventsOptions, *, ctx: Context | None = None
    ) -> ListResponse[Event]:
        return self._page(
            f"/v3/grants/{grant_id}/events/import", Event, options,
            op="events.import_events", ctx=ctx,
        )

    def import_all(
        self, grant_id: str, options: ImportEventsOptions, *, ctx: Context | None = None
    ) -> Iterator[Event]:
        return self._all(
            f"/v3/grants/{grant_id}/events/import", Event, options,
            op="events.import_all", ctx=ctx,
        )
