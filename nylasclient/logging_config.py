"""Opt-in log formatters that stamp lines with the latest Nylas request ID."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from nylasclient.exceptions import NylasError
from nylasclient.request_context import get_request_id

LOGGER_NAME = "nylasclient"

# Attributes present on every LogRecord; anything else came in through ``extra``.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _client_error(record: logging.LogRecord) -> NylasError | None:
    if record.exc_info and isinstance(record.exc_info[1], NylasError):
        return record.exc_info[1]
    return None


def _error_fields(exc: NylasError) -> dict[str, Any]:
    """Structured view of a client error: kind, operation, status, ids."""
    fields: dict[str, Any] = {"kind": exc.kind.value}
    if exc.operation:
        fields["operation"] = exc.operation
    if exc.status_code is not None:
        fields["status_code"] = exc.status_code
    if exc.error_type:
        fields["type"] = exc.error_type
    if exc.request_id:
        fields["request_id"] = exc.request_id
    return fields


class JSONFormatter(logging.Formatter):
    """Single-line JSON output for log aggregators.

    A :class:`~nylasclient.exceptions.NylasError` attached to the record is
    also emitted as an ``error`` object.
    """

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        entry: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value

        exc = _client_error(record)
        if exc is not None:
            entry["error"] = _error_fields(exc)
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines, prefixed with the request ID when one is known."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        ts = _timestamp(record).strftime("%Y-%m-%d %H:%M:%S")

        request_id = get_request_id()
        rid = f"[{request_id}] " if request_id else ""
        line = f"{ts} {record.levelname:<8} {rid}{record.name} - {record.message}"

        exc = _client_error(record)
        if exc is not None:
            line += " " + " ".join(f"{k}={v}" for k, v in _error_fields(exc).items())
        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return line


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    logger_name: str = LOGGER_NAME,
) -> logging.Logger:
    """Attach a stderr handler to the client's logger.

    Only the ``nylasclient`` logger is touched unless *logger_name* says
    otherwise (``""`` is the root logger). Calling it again replaces the
    handler instead of stacking a second one.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    logger.addHandler(handler)
    return logger
