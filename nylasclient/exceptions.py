"""Exception hierarchy for the Nylas client.

Every failure raised by the client is a :class:`NylasError` whose ``kind``
is one of the closed set in :class:`ErrorKind`. Callers can match by class
(``except NotFoundError``) or by kind with :func:`is_kind`, which also
follows ``raise ... from`` chains.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from nylasclient.models import RateLimits


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing-credential"
    BAD_REQUEST = "bad-request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not-found"
    RATE_LIMITED = "rate-limited"
    SERVER_ERROR = "server-error"
    OTHER_HTTP = "other-http"
    NETWORK = "network"
    DECODE = "decode"
    CANCELLED = "cancelled"
    # Exhausted iteration; not a failure.
    DONE = "done"


class NylasError(Exception):
    """Base exception for all client errors."""

    kind: ErrorKind = ErrorKind.OTHER_HTTP

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        request_id: str = "",
        error_type: str = "",
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.request_id = request_id
        self.error_type = error_type
        self.operation: str | None = None
        self.partial: list[Any] | None = None
        super().__init__(message)

    def __str__(self) -> str:
        text = self.message
        details = []
        if self.status_code is not None:
            details.append(f"status={self.status_code}")
        if self.request_id:
            details.append(f"request_id={self.request_id}")
        if details:
            text = f"{text} ({', '.join(details)})"
        if self.operation:
            text = f"{self.operation}: {text}"
        return text


class MissingCredentialError(NylasError):
    """Raised at construction when no API key was supplied."""

    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self) -> None:
        super().__init__("API key required (pass api_key=...)")


class APIError(NylasError):
    """Raised on any HTTP status >= 400 without a more specific class."""

    kind = ErrorKind.OTHER_HTTP


class BadRequestError(APIError):
    """Raised on 400 responses."""

    kind = ErrorKind.BAD_REQUEST


class InvalidRequestError(BadRequestError):
    """Raised when a request cannot be built; nothing was sent."""


class UnauthorizedError(APIError):
    """Raised on 401 responses."""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(APIError):
    """Raised on 404 responses."""

    kind = ErrorKind.NOT_FOUND


class RateLimitError(APIError):
    """Raised on 429 responses once retries are exhausted."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        *,
        rate_limits: RateLimits | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.rate_limits = rate_limits


class ServerError(APIError):
    """Raised on 5xx responses once retries are exhausted."""

    kind = ErrorKind.SERVER_ERROR


class NetworkError(NylasError):
    """Raised when the HTTP exchange itself failed (connect, read, timeout)."""

    kind = ErrorKind.NETWORK


class DecodeError(NylasError):
    """Raised when a response envelope or payload cannot be decoded."""

    kind = ErrorKind.DECODE


class RequestCancelledError(NylasError):
    """Raised when the caller's context was cancelled or its deadline passed."""

    kind = ErrorKind.CANCELLED

    def __init__(self, message: str = "request cancelled") -> None:
        super().__init__(message)


# Maps HTTP status codes to exception classes.
_STATUS_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    404: NotFoundError,
    429: RateLimitError,
}


def error_class_for_status(status_code: int) -> type[APIError]:
    if status_code >= 500:
        return ServerError
    return _STATUS_MAP.get(status_code, APIError)


def is_kind(exc: BaseException | None, kind: ErrorKind) -> bool:
    """Return True if *exc*, or any exception it was raised from, is of *kind*."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if kind is ErrorKind.DONE and isinstance(
            exc, (StopIteration, StopAsyncIteration)
        ):
            return True
        if isinstance(exc, NylasError) and exc.kind is kind:
            return True
        exc = exc.__cause__
    return False
