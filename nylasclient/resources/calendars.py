"""Calendars, availability and free/busy."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service

# Page size sent when the caller does not choose one.
DEFAULT_LIMIT = 50


class Calendar(Record):
    id: str
    grant_id: str = ""
    name: str = ""
    description: str | None = None
    location: str | None = None
    timezone: str | None = None
    is_primary: bool = False
    read_only: bool = False
    is_owned_by_user: bool = False
    hex_color: str | None = None
    hex_foreground_color: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class CalendarListOptions(ListOptions):
    metadata_pair: str | None = None


class CalendarRequest(RequestBody):
    name: str | None = None
    description: str | None = None
    location: str | None = None
    timezone: str | None = None
    hex_color: str | None = None
    metadata: dict[str, str] | None = None


class AvailabilityParticipant(RequestBody):
    email: str
    calendar_ids: list[str] | None = None
    open_hours: list[dict[str, Any]] | None = None


class AvailabilityRequest(RequestBody):
    start_time: int
    end_time: int
    duration_minutes: int
    participants: list[AvailabilityParticipant]
    interval_minutes: int | None = None
    round_to_30_minutes: bool | None = None
    availability_rules: dict[str, Any] | None = None


class TimeSlot(Record):
    start_time: int
    end_time: int
    emails: list[str] = Field(default_factory=list)


class AvailabilityResponse(Record):
    time_slots: list[TimeSlot] = Field(default_factory=list)


class FreeBusyRequest(RequestBody):
    start_time: int
    end_time: int
    emails: list[str]


class BusySlot(Record):
    start_time: int
    end_time: int
    status: str | None = None


class FreeBusy(Record):
    email: str
    time_slots: list[BusySlot] = Field(default_factory=list)


class CalendarsService(Service):
    def list(
        self,
        grant_id: str,
        options: CalendarListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Calendar]:
        limit = None if options is not None and options.limit else DEFAULT_LIMIT
        return self._page(
            f"/v3/grants/{grant_id}/calendars", Calendar, options,
            op="calendars.list", ctx=ctx, limit=limit,
        )

    def list_all(
        self,
        grant_id: str,
        options: CalendarListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Calendar]:
        limit = None if options is not None and options.limit else DEFAULT_LIMIT
        return self._all(
            f"/v3/grants/{grant_id}/calendars", Calendar, options,
            op="calendars.list_all", ctx=ctx, limit=limit,
        )

    def get(self, grant_id: str, calendar_id: str, *, ctx: Context | None = None) -> Calendar:
        """Fetch one calendar; ``"primary"`` names the account's main calendar."""
        return self._one(
            "GET", f"/v3/grants/{grant_id}/calendars/{calendar_id}", Calendar,
            op=f"calendars.get({calendar_id})", ctx=ctx,
        )

    def create(
        self, grant_id: str, request: CalendarRequest, *, ctx: Context | None = None
    ) -> Calendar:
        return self._one(
            "POST", f"/v3/grants/{grant_id}/calendars", Calendar,
            body=request, op="calendars.create", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        calendar_id: str,
        request: CalendarRequest,
        *,
        ctx: Context | None = None,
    ) -> Calendar:
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/calendars/{calendar_id}", Calendar,
            body=request, op=f"calendars.update({calendar_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, calendar_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/calendars/{calendar_id}",
            op=f"calendars.delete({calendar_id})", ctx=ctx,
        )

    def availability(
        self, request: AvailabilityRequest, *, ctx: Context | None = None
    ) -> AvailabilityResponse:
        return self._one(
            "POST", "/v3/calendars/availability", AvailabilityResponse,
            body=request, op="calendars.availability", ctx=ctx,
        )

    def free_busy(
        self, grant_id: str, request: FreeBusyRequest, *, ctx: Context | None = None
    ) -> list[FreeBusy]:
        return self._one(
            "POST", f"/v3/grants/{grant_id}/calendars/free-busy", list[FreeBusy],
            body=request, op="calendars.free_busy", ctx=ctx,
        )
