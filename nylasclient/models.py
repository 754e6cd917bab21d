"""Envelope, rate-limit and option-record models shared by every resource."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def _parse_int(raw: str | None) -> int:
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return 0


@dataclass(frozen=True)
class RateLimits:
    """Rate-limit metadata parsed from the most recent response headers.

    Fields are zero when the server omitted a header or sent a malformed
    value. ``reset`` is a Unix epoch second.
    """

    limit: int = 0
    remaining: int = 0
    reset: int = 0

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimits:
        """Parse ``X-RateLimit-*`` headers; absent or bad values become 0."""
        return cls(
            limit=_parse_int(headers.get("x-ratelimit-limit")),
            remaining=_parse_int(headers.get("x-ratelimit-remaining")),
            reset=_parse_int(headers.get("x-ratelimit-reset")),
        )

    @property
    def reset_at(self) -> datetime | None:
        if not self.reset:
            return None
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)


class Record(BaseModel):
    """Base for resource records. Unknown fields from the server are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class RequestBody(BaseModel):
    """Base for request bodies; serialized without unset optional fields."""

    model_config = ConfigDict(populate_by_name=True)


class ListOptions(BaseModel):
    """Optional query parameters for a list endpoint.

    Subclasses add their own filters. :meth:`values` produces the option bag
    consumed by :func:`nylasclient.query.encode_query`: fields left as None,
    empty strings and empty lists are omitted.
    """

    model_config = ConfigDict(populate_by_name=True)

    limit: int | None = None
    page_token: str | None = None

    def values(self) -> dict[str, Any]:
        dumped = self.model_dump(exclude_none=True, by_alias=True)
        return {k: v for k, v in dumped.items() if v != "" and v != []}

    def with_page_token(self, cursor: str) -> ListOptions:
        return self.model_copy(update={"page_token": cursor or None})


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


class Envelope(BaseModel):
    """First decoding phase: the wrapper around a deferred raw payload."""

    data: Any = None
    request_id: str | None = None
    next_cursor: str | None = None


class Response(BaseModel, Generic[T]):
    """A wrapped single-resource response."""

    data: T
    request_id: str = ""


class ListResponse(BaseModel, Generic[T]):
    """A wrapped list response; ``next_cursor`` is empty on the last page."""

    data: list[T] = Field(default_factory=list)
    request_id: str = ""
    next_cursor: str = ""
