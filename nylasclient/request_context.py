"""Correlation ID of the latest API exchange, via contextvars."""

from __future__ import annotations

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("nylas_request_id", default="")


def set_request_id(request_id: str) -> None:
    """Record the ``X-Request-Id`` of the response just received."""
    request_id_var.set(request_id)


def get_request_id() -> str:
    """Read the current request ID from the contextvar."""
    return request_id_var.get()
