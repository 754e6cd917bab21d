"""Tests for the asyncio transport and async iteration."""

from __future__ import annotations

import asyncio
import threading

import httpx
import pytest
from conftest import Recorder, error_response, json_response, make_async_client

from nylasclient import (
    AsyncIterator,
    Context,
    ErrorKind,
    NetworkError,
    NotFoundError,
    Request,
    RequestCancelledError,
    ServerError,
    is_kind,
)
from nylasclient.models import Record
from nylasclient.resources.grants import GrantListOptions


class Item(Record):
    id: str


def _get(path: str = "/v3/items/1") -> Request:
    return Request("GET", path)


# ---------------------------------------------------------------------------
# Execute
# ---------------------------------------------------------------------------


class TestAsyncExecute:
    async def test_wrapped_single(self):
        rec = Recorder(json_response({"data": {"id": "msg-456"}, "request_id": "req-1"}))
        async with make_async_client(rec) as client:
            resp = await client.execute(_get(), Item)
        assert resp.data.id == "msg-456"
        assert resp.request_id == "req-1"
        assert client.rate_limits.remaining == 99

    async def test_error_mapping(self):
        rec = Recorder(error_response(404, "not found", headers={"X-Request-Id": "req-77"}))
        async with make_async_client(rec) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.execute(_get(), Item, op="items.get(1)")
        assert exc_info.value.request_id == "req-77"
        assert exc_info.value.operation == "items.get(1)"

    async def test_raw(self):
        rec = Recorder(json_response({"id": "raw"}))
        async with make_async_client(rec) as client:
            item = await client.execute_raw(Request("POST", "/v3/token"), Item)
        assert item.id == "raw"

    async def test_no_content(self):
        rec = Recorder(httpx.Response(200))
        async with make_async_client(rec) as client:
            resp = await client.execute(Request("DELETE", "/v3/items/1"))
        assert resp.data is None


# ---------------------------------------------------------------------------
# Retries and cancellation
# ---------------------------------------------------------------------------


class TestAsyncRetries:
    async def test_transient_500(self, waits):
        rec = Recorder(
            error_response(500),
            error_response(500),
            json_response({"data": {"id": "x"}}),
        )
        async with make_async_client(rec, max_retries=3, retry_wait=0.001) as client:
            resp = await client.execute(_get(), Item)
        assert resp.data.id == "x"
        assert len(rec.requests) == 3
        assert waits == [0.001, 0.002]

    async def test_retry_after(self, waits):
        rec = Recorder(
            error_response(429, headers={"Retry-After": "2"}),
            json_response({"data": {"id": "x"}}),
        )
        async with make_async_client(rec, max_retries=1) as client:
            await client.execute(_get(), Item)
        assert waits == [2.0]

    async def test_exhausted(self, waits):
        rec = Recorder(error_response(503))
        async with make_async_client(rec, max_retries=1) as client:
            with pytest.raises(ServerError):
                await client.execute(_get(), Item)
        assert len(rec.requests) == 2

    async def test_network_error(self, waits):
        def boom(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_async_client(Recorder(boom), max_retries=1) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.execute(_get(), Item)
        assert is_kind(exc_info.value, ErrorKind.NETWORK)

    async def test_context_cancelled(self):
        rec = Recorder(json_response({"data": {"id": "x"}}))
        ctx = Context()
        ctx.cancel()
        async with make_async_client(rec) as client:
            with pytest.raises(RequestCancelledError):
                await client.execute(_get(), Item, ctx=ctx)
        assert rec.requests == []

    async def test_deadline_during_backoff(self):
        rec = Recorder(error_response(500))
        async with make_async_client(rec, max_retries=3, retry_wait=10) as client:
            with pytest.raises(RequestCancelledError):
                await client.execute(_get(), Item, ctx=Context(timeout=0.05))
        assert len(rec.requests) == 1

    async def test_cancel_interrupts_backoff(self):
        rec = Recorder(error_response(500))
        ctx = Context()
        loop = asyncio.get_running_loop()
        handle = loop.call_later(0.05, ctx.cancel)
        start = loop.time()
        try:
            async with make_async_client(rec, max_retries=3, retry_wait=30) as client:
                with pytest.raises(RequestCancelledError):
                    await client.execute(_get(), Item, ctx=ctx)
        finally:
            handle.cancel()
        assert loop.time() - start < 5
        assert len(rec.requests) == 1

    async def test_cancel_from_another_thread_interrupts_backoff(self):
        rec = Recorder(error_response(429, headers={"Retry-After": "30"}))
        ctx = Context()
        timer = threading.Timer(0.05, ctx.cancel)
        timer.start()
        try:
            async with make_async_client(rec, max_retries=3) as client:
                with pytest.raises(RequestCancelledError):
                    await client.execute(_get(), Item, ctx=ctx)
        finally:
            timer.cancel()
        assert len(rec.requests) == 1

    async def test_cancel_aborts_request_in_flight(self):
        started = asyncio.Event()
        finished = []

        async def slow(request: httpx.Request) -> httpx.Response:
            started.set()
            await asyncio.sleep(30)
            finished.append(request)
            return json_response({"data": {"id": "x"}})

        ctx = Context()
        async with make_async_client(slow) as client:
            call = asyncio.create_task(client.execute(_get(), Item, ctx=ctx))
            await started.wait()
            ctx.cancel()
            with pytest.raises(RequestCancelledError):
                await asyncio.wait_for(call, 5)
        assert finished == []

    async def test_deadline_aborts_request_in_flight(self):
        async def slow(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(30)
            return json_response({"data": {"id": "x"}})

        async with make_async_client(slow) as client:
            with pytest.raises(RequestCancelledError, match="deadline"):
                await asyncio.wait_for(
                    client.execute(_get(), Item, ctx=Context(timeout=0.05)), 5
                )

    async def test_task_cancellation_propagates(self):
        rec = Recorder(error_response(500))
        async with make_async_client(rec, max_retries=3, retry_wait=10) as client:
            task = asyncio.create_task(client.execute(_get(), Item))
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task


# ---------------------------------------------------------------------------
# Services and iteration
# ---------------------------------------------------------------------------


class TestAsyncServices:
    async def test_service_methods_are_awaitable(self):
        rec = Recorder(json_response({"data": {"id": "cal-1", "name": "Work"}}))
        async with make_async_client(rec) as client:
            cal = await client.calendars.get("g1", "cal-1")
        assert cal.id == "cal-1"
        assert rec.requests[0].url.path == "/v3/grants/g1/calendars/cal-1"

    async def test_service_error_tagged(self):
        rec = Recorder(error_response(404))
        async with make_async_client(rec) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.calendars.get("g1", "cal-1")
        assert str(exc_info.value).startswith("calendars.get(cal-1): ")

    async def test_delete_returns_none(self):
        rec = Recorder(json_response({"request_id": "r"}))
        async with make_async_client(rec) as client:
            assert await client.folders.delete("g1", "f1") is None

    async def test_list_all(self):
        rec = Recorder(
            json_response({"data": [{"id": "a", "subject": "s"}], "next_cursor": "p2"}),
            json_response({"data": [{"id": "b"}]}),
        )
        async with make_async_client(rec) as client:
            it = client.messages.list_all("g1")
            assert isinstance(it, AsyncIterator)
            ids = [m.id async for m in it]
        assert ids == ["a", "b"]
        assert rec.requests[1].url.params["page_token"] == "p2"

    async def test_grants_offset_collect(self):
        rec = Recorder(
            json_response({"data": [{"id": "g1"}, {"id": "g2"}]}),
            json_response({"data": [{"id": "g3"}]}),
        )
        async with make_async_client(rec) as client:
            grants = await client.grants.list_all(GrantListOptions(limit=2)).collect()
        assert [g.id for g in grants] == ["g1", "g2", "g3"]
        assert len(rec.requests) == 2
