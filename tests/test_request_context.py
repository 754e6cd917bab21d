"""Tests for request ID contextvar propagation."""

from __future__ import annotations

import asyncio

from nylasclient.request_context import get_request_id, request_id_var, set_request_id


def test_default_is_empty():
    assert get_request_id() == ""


def test_set_and_get():
    set_request_id("req-1")
    assert get_request_id() == "req-1"
    assert request_id_var.get() == "req-1"


async def test_isolated_between_tasks():
    async def worker(rid: str) -> str:
        set_request_id(rid)
        await asyncio.sleep(0)
        return get_request_id()

    results = await asyncio.gather(worker("a"), worker("b"))
    assert results == ["a", "b"]
    assert get_request_id() == ""
