"""Python client for the Nylas v3 email, calendar and contacts API."""

from __future__ import annotations

from nylasclient.client import AsyncClient, Client
from nylasclient.config import ClientConfig, Region
from nylasclient.context import Context
from nylasclient.exceptions import (
    APIError,
    BadRequestError,
    DecodeError,
    ErrorKind,
    InvalidRequestError,
    MissingCredentialError,
    NetworkError,
    NotFoundError,
    NylasError,
    RateLimitError,
    RequestCancelledError,
    ServerError,
    UnauthorizedError,
    is_kind,
)
from nylasclient.models import ListOptions, ListResponse, RateLimits, Response
from nylasclient.pagination import AsyncIterator, Iterator
from nylasclient.query import Request, encode_query

__version__ = "0.1.0"

__all__ = [
    "AsyncClient",
    "Client",
    "ClientConfig",
    "Region",
    "Context",
    "Iterator",
    "AsyncIterator",
    "NylasError",
    "ErrorKind",
    "is_kind",
    "APIError",
    "BadRequestError",
    "InvalidRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "NetworkError",
    "DecodeError",
    "MissingCredentialError",
    "RequestCancelledError",
    "RateLimits",
    "Response",
    "ListResponse",
    "ListOptions",
    "Request",
    "encode_query",
]
