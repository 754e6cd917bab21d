"""Lazy cursor iteration over list endpoints."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from nylasclient.context import Context

logger = logging.getLogger(__name__)

T = TypeVar("T")

Page = tuple[Sequence[T], str]
FetchPage = Callable[[Context, str], Page]
AsyncFetchPage = Callable[[Context, str], Awaitable[Page]]


class _PageState(Generic[T]):
    """Buffer, cursor and terminal flags shared by both iterator flavors."""

    def __init__(self, ctx: Context | None) -> None:
        self.ctx = ctx if ctx is not None else Context()
        self._reset_state()

    def _reset_state(self) -> None:
        self.buffer: list[T] = []
        self.index = 0
        self.cursor = ""
        self.done = False
        self.error: BaseException | None = None

    def reset(self) -> None:
        """Forget everything; the next pull refetches the first page."""
        self._reset_state()

    def _take_buffered(self) -> tuple[bool, T | None]:
        if self.error is not None:
            raise self.error
        if self.index < len(self.buffer):
            item = self.buffer[self.index]
            self.index += 1
            return True, item
        return False, None

    def _accept_page(self, items: Sequence[T], next_cursor: str) -> bool:
        """Store a fetched page; return False when iteration is exhausted."""
        if not items:
            self.done = True
            self.buffer = []
            self.index = 0
            return False
        self.buffer = list(items)
        self.index = 0
        self.cursor = next_cursor or ""
        self.done = not self.cursor
        return True


class Iterator(_PageState[T]):
    """Single-pass iterator that fetches one page at a time.

    *fetch* is called as ``fetch(ctx, cursor)`` and returns
    ``(items, next_cursor)``; an empty cursor means the first page and an
    empty ``next_cursor`` means there are no more pages. The first error
    raised by *fetch* is sticky: every later pull raises it again until
    :meth:`reset` is called.

    Example::

        for message in client.messages.list_all(grant_id):
            process(message)
    """

    def __init__(self, fetch: FetchPage, ctx: Context | None = None) -> None:
        super().__init__(ctx)
        self._fetch = fetch

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        found, item = self._take_buffered()
        if found:
            return item  # type: ignore[return-value]
        if self.done:
            raise StopIteration
        try:
            items, next_cursor = self._fetch(self.ctx, self.cursor)
        except Exception as exc:
            self.error = exc
            raise
        if not self._accept_page(items, next_cursor):
            raise StopIteration
        logger.debug("Fetched page of %d items (more=%s)", len(items), not self.done)
        return self._take_buffered()[1]  # type: ignore[return-value]

    def collect(self) -> list[T]:
        """Drain the iterator into a list.

        On failure the error is raised with ``partial`` set to the items
        collected before it.
        """
        items: list[T] = []
        while True:
            try:
                items.append(next(self))
            except StopIteration:
                return items
            except Exception as exc:
                exc.partial = items  # type: ignore[attr-defined]
                raise


class AsyncIterator(_PageState[T]):
    """Async counterpart of :class:`Iterator`; *fetch* is a coroutine function."""

    def __init__(self, fetch: AsyncFetchPage, ctx: Context | None = None) -> None:
        super().__init__(ctx)
        self._fetch = fetch

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        found, item = self._take_buffered()
        if found:
            return item  # type: ignore[return-value]
        if self.done:
            raise StopAsyncIteration
        try:
            items, next_cursor = await self._fetch(self.ctx, self.cursor)
        except Exception as exc:
            self.error = exc
            raise
        if not self._accept_page(items, next_cursor):
            raise StopAsyncIteration
        logger.debug("Fetched page of %d items (more=%s)", len(items), not self.done)
        return self._take_buffered()[1]  # type: ignore[return-value]

    async def collect(self) -> list[T]:
        items: list[T] = []
        while True:
            try:
                items.append(await self.__anext__())
            except StopAsyncIteration:
                return items
            except Exception as exc:
                exc.partial = items  # type: ignore[attr-defined]
                raise


# ---------------------------------------------------------------------------
# Offset-based endpoints
# ---------------------------------------------------------------------------


def offset_from_cursor(cursor: str) -> int:
    """Offset encoded in a synthetic cursor; the empty cursor is offset 0."""
    return int(cursor) if cursor else 0


def next_offset_cursor(offset: int, count: int, limit: int) -> str:
    """Cursor for the page after one of *count* items, or "" after a short page."""
    if count < limit:
        return ""
    return str(offset + count)
