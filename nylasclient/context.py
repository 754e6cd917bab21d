"""Cancellation token passed through every transport and iterator call."""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Awaitable, TypeVar

from nylasclient.exceptions import RequestCancelledError

T = TypeVar("T")


class Context:
    """A cancellation flag with an optional deadline.

    ``cancel()`` may be called from any thread. The transport checks the
    context before each attempt, caps each attempt's timeout at
    :meth:`remaining`, and wakes from backoff sleeps as soon as the context
    is cancelled. On the async client an attempt in flight is abandoned too.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + timeout
        self._lock = threading.Lock()
        self._waiters: set[tuple[asyncio.AbstractEventLoop, asyncio.Event]] = set()

    def cancel(self) -> None:
        with self._lock:
            self._event.set()
            waiters = list(self._waiters)
        for loop, event in waiters:
            if not loop.is_closed():
                loop.call_soon_threadsafe(event.set)

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        """Raise :class:`RequestCancelledError` if cancelled or expired."""
        if self._event.is_set():
            raise RequestCancelledError()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise RequestCancelledError("context deadline exceeded")

    def wait(self, seconds: float) -> bool:
        """Sleep up to *seconds*; return True if the context ended meanwhile."""
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            self._event.wait(remaining)
            return True
        self._event.wait(seconds)
        return self.cancelled

    # -- asyncio -------------------------------------------------------------

    async def _wait_cancel(self, timeout: float | None) -> bool:
        """Wait until :meth:`cancel` is called or *timeout* passes."""
        loop = asyncio.get_running_loop()
        event = asyncio.Event()
        waiter = (loop, event)
        with self._lock:
            if self._event.is_set():
                return True
            self._waiters.add(waiter)
        try:
            await asyncio.wait_for(event.wait(), timeout)
            return True
        except asyncio.TimeoutError:
            return False
        finally:
            with self._lock:
                self._waiters.discard(waiter)

    async def sleep(self, seconds: float) -> bool:
        """Async :meth:`wait`; returns early when the context is cancelled."""
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            await self._wait_cancel(remaining)
            return True
        await self._wait_cancel(seconds)
        return self.cancelled

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await *awaitable*, abandoning it if the context ends first.

        Raises :class:`RequestCancelledError` when the context wins; the
        abandoned task is cancelled and awaited before returning.
        """
        task = asyncio.ensure_future(awaitable)
        watcher = asyncio.ensure_future(self._wait_cancel(self.remaining()))
        try:
            await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = {t for t in (task, watcher) if not t.done()}
            for t in pending:
                t.cancel()
            if pending:
                await asyncio.wait(pending)
        if task.cancelled():
            self.check()
            raise RequestCancelledError()
        return task.result()
