from __future__ import annotations

import json
from typing import Callable
from unittest.mock import patch

import httpx
import pytest

from nylasclient import AsyncClient, Client, Context
from nylasclient.request_context import request_id_var

BASE_URL = "https://api.test.nylas.com"

RATE_HEADERS = {
    "x-ratelimit-limit": "100",
    "x-ratelimit-remaining": "99",
    "x-ratelimit-reset": "1700000000",
}

Handler = Callable[[httpx.Request], httpx.Response]


def json_response(
    body: object,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    hdrs = dict(RATE_HEADERS)
    if headers:
        hdrs.update(headers)
    return httpx.Response(status_code, json=body, headers=hdrs)


def error_response(
    status_code: int,
    message: str = "error",
    error_type: str = "api_error",
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    return json_response(
        {"type": error_type, "message": message}, status_code, headers
    )


def request_json(request: httpx.Request) -> object:
    return json.loads(request.content)


class Recorder:
    """Mock transport handler that replays queued responses and keeps requests."""

    def __init__(self, *responses: httpx.Response | Handler) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        # The last queued response repeats.
        nxt = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if callable(nxt):
            return nxt(request)
        return httpx.Response(nxt.status_code, headers=nxt.headers, content=nxt.content)


def make_client(handler: Handler, **options: object) -> Client:
    options.setdefault("base_url", BASE_URL)
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return Client("test-key", http_client=http, **options)


def make_async_client(handler: Handler, **options: object) -> AsyncClient:
    options.setdefault("base_url", BASE_URL)
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncClient("test-key", http_client=http, **options)


@pytest.fixture
def waits():
    """Record backoff waits instead of sleeping."""
    recorded: list[float] = []

    def fake_wait(self: Context, seconds: float) -> bool:
        recorded.append(seconds)
        return self.cancelled

    async def fake_sleep(self: Context, seconds: float) -> bool:
        recorded.append(seconds)
        return self.cancelled

    with patch.object(Context, "wait", fake_wait), patch.object(Context, "sleep", fake_sleep):
        yield recorded


@pytest.fixture(autouse=True)
def _clear_request_id():
    """Reset the correlation ID between every test."""
    token = request_id_var.set("")
    yield
    request_id_var.reset(token)
