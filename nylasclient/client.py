"""Sync and async HTTP clients for the Nylas v3 API."""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Callable, Generator

import httpx
from pydantic import TypeAdapter, ValidationError

from nylasclient.config import ClientConfig, Region
from nylasclient.context import Context
from nylasclient.exceptions import (
    APIError,
    DecodeError,
    InvalidRequestError,
    NetworkError,
    NylasError,
    RateLimitError,
    RequestCancelledError,
    error_class_for_status,
)
from nylasclient.models import Envelope, ListResponse, RateLimits, Response
from nylasclient.pagination import (
    AsyncIterator,
    Iterator,
    next_offset_cursor,
    offset_from_cursor,
)
from nylasclient.query import Request
from nylasclient.request_context import set_request_id
from nylasclient.resources import (
    AttachmentsService,
    AuthService,
    CalendarsService,
    ContactsService,
    DraftsService,
    EventsService,
    FoldersService,
    GrantsService,
    MessagesService,
    NotetakersService,
    ThreadsService,
    WebhooksService,
)

logger = logging.getLogger(__name__)

PageRequest = Callable[[str], Request]
OffsetPageRequest = Callable[[int, int], Request]


def _backoff(retry_wait: float, attempt: int) -> float:
    """Strict binary exponential backoff: base, 2x base, 4x base, ..."""
    return retry_wait * (2 ** attempt)


def _is_retriable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _retry_delay(response: httpx.Response, retry_wait: float, attempt: int) -> float:
    """Wait before the next attempt; honours ``Retry-After`` seconds on 429."""
    if response.status_code == 429:
        raw = response.headers.get("retry-after")
        if raw is not None:
            try:
                return float(max(0, int(raw.strip())))
            except ValueError:
                pass
    return _backoff(retry_wait, attempt)


def _build_exception(response: httpx.Response) -> APIError:
    """Construct the appropriate exception for a response with status >= 400."""
    status_code = response.status_code
    message = ""
    error_type = ""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body["error"] if isinstance(body.get("error"), dict) else body
        message = str(detail.get("message") or "")
        error_type = str(detail.get("type") or "")
    if not message:
        message = f"request failed with status {status_code}"

    exc_cls = error_class_for_status(status_code)
    kwargs: dict[str, Any] = {
        "status_code": status_code,
        "request_id": response.headers.get("x-request-id", ""),
        "error_type": error_type,
    }
    if exc_cls is RateLimitError:
        return RateLimitError(
            message, rate_limits=RateLimits.from_headers(response.headers), **kwargs
        )
    return exc_cls(message, **kwargs)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _decode_error(response: httpx.Response, what: str, exc: Exception) -> DecodeError:
    return DecodeError(
        f"cannot decode {what}: {exc}",
        status_code=response.status_code,
        request_id=response.headers.get("x-request-id", ""),
    )


def _read_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise _decode_error(response, "response body", exc) from exc


def _validate(response: httpx.Response, tp: Any, payload: Any) -> Any:
    try:
        return _adapter(tp).validate_python(payload)
    except ValidationError as exc:
        raise _decode_error(response, "response payload", exc) from exc


def _read_envelope(response: httpx.Response) -> Envelope:
    payload = _read_json(response)
    try:
        return Envelope.model_validate(payload)
    except ValidationError as exc:
        raise _decode_error(response, "response envelope", exc) from exc


def _decode_wrapped(response: httpx.Response, model: Any) -> Response[Any]:
    if response.status_code >= 400:
        raise _build_exception(response)
    header_id = response.headers.get("x-request-id", "")
    if model is None:
        return Response[Any](data=None, request_id=header_id)
    envelope = _read_envelope(response)
    data = _validate(response, model, envelope.data)
    return Response[Any](data=data, request_id=envelope.request_id or header_id)


def _decode_list(response: httpx.Response, model: Any) -> ListResponse[Any]:
    if response.status_code >= 400:
        raise _build_exception(response)
    header_id = response.headers.get("x-request-id", "")
    if model is None:
        return ListResponse[Any](request_id=header_id)
    envelope = _read_envelope(response)
    items = envelope.data if envelope.data is not None else []
    data = _validate(response, list[model], items)
    return ListResponse[Any](
        data=data,
        request_id=envelope.request_id or header_id,
        next_cursor=envelope.next_cursor or "",
    )


def _decode_raw(response: httpx.Response, model: Any) -> Any:
    if response.status_code >= 400:
        raise _build_exception(response)
    if model is None:
        return None
    return _validate(response, model, _read_json(response))


@contextmanager
def _operation(op: str | None) -> Generator[None, None, None]:
    """Tag errors escaping the block with the resource operation name."""
    try:
        yield
    except NylasError as exc:
        if op and exc.operation is None:
            exc.operation = op
        raise


# ---------------------------------------------------------------------------
# Shared configuration and bookkeeping
# ---------------------------------------------------------------------------


class _BaseClient:
    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        region: Region | str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_wait: float | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        if config is None:
            options = {
                "api_key": api_key,
                "base_url": base_url,
                "region": region,
                "timeout": timeout,
                "max_retries": max_retries,
                "retry_wait": retry_wait,
            }
            config = ClientConfig(**{k: v for k, v in options.items() if v is not None})
        self.config = config
        self._rate_lock = threading.Lock()
        self._rate_limits = RateLimits()

        self.messages = MessagesService(self)
        self.threads = ThreadsService(self)
        self.drafts = DraftsService(self)
        self.calendars = CalendarsService(self)
        self.events = EventsService(self)
        self.contacts = ContactsService(self)
        self.folders = FoldersService(self)
        self.attachments = AttachmentsService(self)
        self.grants = GrantsService(self)
        self.webhooks = WebhooksService(self)
        self.notetakers = NotetakersService(self)
        self.auth = AuthService(self)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def rate_limits(self) -> RateLimits:
        """Rate-limit snapshot from the most recent response seen by any caller."""
        with self._rate_lock:
            return self._rate_limits

    def _observe(self, response: httpx.Response) -> None:
        rate_limits = RateLimits.from_headers(response.headers)
        with self._rate_lock:
            self._rate_limits = rate_limits
        set_request_id(response.headers.get("x-request-id", ""))

    def _build_request(self, http: httpx.Client | httpx.AsyncClient, request: Request) -> httpx.Request:
        raw_url = self.config.base_url + request.path
        try:
            url = httpx.URL(raw_url)
        except httpx.InvalidURL as exc:
            raise InvalidRequestError(f"invalid request URL {raw_url!r}: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidRequestError(f"request URL {raw_url!r} is not absolute")

        content = None
        body = request.json_body()
        if body is not None:
            try:
                content = json.dumps(body).encode()
            except (TypeError, ValueError) as exc:
                raise InvalidRequestError(f"cannot encode request body: {exc}") from exc

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(request.headers)
        return http.build_request(
            request.method,
            url,
            params=request.query() or None,
            content=content,
            headers=headers,
        )

    def _attempt_timeout(self, ctx: Context) -> httpx.Timeout:
        remaining = ctx.remaining()
        seconds = self.config.timeout
        if remaining is not None:
            seconds = min(seconds, remaining)
        return httpx.Timeout(seconds)


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class Client(_BaseClient):
    """Synchronous client (backed by ``httpx.Client``).

    Safe to share between threads. Every operation takes an optional
    ``ctx`` (:class:`~nylasclient.context.Context`) for cancellation and
    deadlines.

    Example::

        with Client(api_key="nyk_...", region="eu") as client:
            cal = client.calendars.get(grant_id, "primary")
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        **options: Any,
    ) -> None:
        super().__init__(api_key, **options)
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=self.config.timeout)

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # -- internal ------------------------------------------------------------

    def _send(self, request: Request, ctx: Context) -> httpx.Response:
        http_request = self._build_request(self._http, request)
        max_retries = self.config.max_retries
        response: httpx.Response | None = None

        for attempt in range(max_retries + 1):
            ctx.check()
            http_request.extensions["timeout"] = self._attempt_timeout(ctx).as_dict()
            try:
                response = self._http.send(http_request)
            except httpx.TransportError as exc:
                if ctx.cancelled:
                    raise RequestCancelledError() from exc
                if attempt < max_retries:
                    wait = _backoff(self.config.retry_wait, attempt)
                    logger.warning(
                        "%s %s raised %s, retrying in %.3fs (attempt %d/%d)",
                        request.method, request.path, type(exc).__name__,
                        wait, attempt + 1, max_retries + 1,
                    )
                    if ctx.wait(wait):
                        raise RequestCancelledError() from exc
                    continue
                logger.error(
                    "%s %s failed after %d attempts",
                    request.method, request.path, attempt + 1,
                    exc_info=True,
                )
                raise NetworkError(str(exc) or type(exc).__name__) from exc

            self._observe(response)
            logger.debug(
                "%s %s -> %d (attempt %d)",
                request.method, request.path, response.status_code, attempt + 1,
            )
            if not _is_retriable(response.status_code):
                return response
            if attempt < max_retries:
                wait = _retry_delay(response, self.config.retry_wait, attempt)
                response.close()
                logger.warning(
                    "%s %s returned %d, retrying in %.3fs (attempt %d/%d)",
                    request.method, request.path, response.status_code,
                    wait, attempt + 1, max_retries + 1,
                )
                if ctx.wait(wait):
                    raise RequestCancelledError()

        assert response is not None
        return response

    # -- transport operations ------------------------------------------------

    def execute(
        self,
        request: Request,
        model: Any = None,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> Response[Any]:
        """Send *request* and decode a ``{data, request_id}`` envelope into *model*."""
        with _operation(op):
            response = self._send(request, ctx or Context())
            try:
                return _decode_wrapped(response, model)
            finally:
                response.close()

    def execute_list(
        self,
        request: Request,
        model: Any,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> ListResponse[Any]:
        """Send *request* and decode a list envelope of *model* items."""
        with _operation(op):
            response = self._send(request, ctx or Context())
            try:
                return _decode_list(response, model)
            finally:
                response.close()

    def execute_raw(
        self,
        request: Request,
        model: Any = None,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> Any:
        """Send *request* and decode the unwrapped body; None when *model* is None."""
        with _operation(op):
            response = self._send(request, ctx or Context())
            try:
                return _decode_raw(response, model)
            finally:
                response.close()

    # -- pagination ----------------------------------------------------------

    def iterate(
        self,
        page_request: PageRequest,
        model: Any,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> Iterator[Any]:
        """Iterator over a cursor-paginated list endpoint."""

        def fetch(ctx: Context, cursor: str) -> tuple[list[Any], str]:
            page = self.execute_list(page_request(cursor), model, op=op, ctx=ctx)
            return page.data, page.next_cursor

        return Iterator(fetch, ctx)

    def iterate_offset(
        self,
        page_request: OffsetPageRequest,
        model: Any,
        limit: int,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> Iterator[Any]:
        """Iterator over an offset/limit list endpoint; a short page ends it."""

        def fetch(ctx: Context, cursor: str) -> tuple[list[Any], str]:
            offset = offset_from_cursor(cursor)
            page = self.execute_list(page_request(offset, limit), model, op=op, ctx=ctx)
            return page.data, next_offset_cursor(offset, len(page.data), limit)

        return Iterator(fetch, ctx)


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncClient(_BaseClient):
    """Async client (backed by ``httpx.AsyncClient``).

    Resource methods return coroutines and ``list_all`` returns an
    :class:`~nylasclient.pagination.AsyncIterator`. Task cancellation
    propagates as ``asyncio.CancelledError``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        **options: Any,
    ) -> None:
        super().__init__(api_key, **options)
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self.config.timeout)

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # -- internal ------------------------------------------------------------

    async def _send(self, request: Request, ctx: Context) -> httpx.Response:
        http_request = self._build_request(self._http, request)
        max_retries = self.config.max_retries
        response: httpx.Response | None = None

        for attempt in range(max_retries + 1):
            ctx.check()
            http_request.extensions["timeout"] = self._attempt_timeout(ctx).as_dict()
            try:
                response = await ctx.run(self._http.send(http_request))
            except httpx.TransportError as exc:
                if ctx.cancelled:
                    raise RequestCancelledError() from exc
                if attempt < max_retries:
                    wait = _backoff(self.config.retry_wait, attempt)
                    logger.warning(
                        "%s %s raised %s, retrying in %.3fs (attempt %d/%d)",
                        request.method, request.path, type(exc).__name__,
                        wait, attempt + 1, max_retries + 1,
                    )
                    if await ctx.sleep(wait):
                        raise RequestCancelledError() from exc
                    continue
                logger.error(
                    "%s %s failed after %d attempts",
                    request.method, request.path, attempt + 1,
                    exc_info=True,
                )
                raise NetworkError(str(exc) or type(exc).__name__) from exc

            self._observe(response)
            logger.debug(
                "%s %s -> %d (attempt %d)",
                request.method, request.path, response.status_code, attempt + 1,
            )
            if not _is_retriable(response.status_code):
                return response
            if attempt < max_retries:
                wait = _retry_delay(response, self.config.retry_wait, attempt)
                await response.aclose()
                logger.warning(
                    "%s %s returned %d, retrying in %.3fs (attempt %d/%d)",
                    request.method, request.path, response.status_code,
                    wait, attempt + 1, max_retries + 1,
                )
                if await ctx.sleep(wait):
                    raise RequestCancelledError()

        assert response is not None
        return response

    # -- transport operations ------------------------------------------------

    async def execute(
        self,
        request: Request,
        model: Any = None,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> Response[Any]:
        with _operation(op):
            response = await self._send(request, ctx or Context())
            try:
                return _decode_wrapped(response, model)
            finally:
                await response.aclose()

    async def execute_list(
        self,
        request: Request,
        model: Any,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> ListResponse[Any]:
        with _operation(op):
            response = await self._send(request, ctx or Context())
            try:
                return _decode_list(response, model)
            finally:
                await response.aclose()

    async def execute_raw(
        self,
        request: Request,
        model: Any = None,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> Any:
        with _operation(op):
            response = await self._send(request, ctx or Context())
            try:
                return _decode_raw(response, model)
            finally:
                await response.aclose()

    # -- pagination ----------------------------------------------------------

    def iterate(
        self,
        page_request: PageRequest,
        model: Any,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> AsyncIterator[Any]:
        async def fetch(ctx: Context, cursor: str) -> tuple[list[Any], str]:
            page = await self.execute_list(page_request(cursor), model, op=op, ctx=ctx)
            return page.data, page.next_cursor

        return AsyncIterator(fetch, ctx)

    def iterate_offset(
        self,
        page_request: OffsetPageRequest,
        model: Any,
        limit: int,
        *,
        op: str | None = None,
        ctx: Context | None = None,
    ) -> AsyncIterator[Any]:
        async def fetch(ctx: Context, cursor: str) -> tuple[list[Any], str]:
            offset = offset_from_cursor(cursor)
            page = await self.execute_list(page_request(offset, limit), model, op=op, ctx=ctx)
            return page.data, next_offset_cursor(offset, len(page.data), limit)

        return AsyncIterator(fetch, ctx)
