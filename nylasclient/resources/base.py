"""Shared plumbing for resource services.

A service is a thin view over the client: each method builds one
:class:`~nylasclient.query.Request` and hands it to exactly one transport
operation. The same service class serves both :class:`~nylasclient.Client`
and :class:`~nylasclient.AsyncClient`; with the async client every method
returns an awaitable instead of the value.
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Mapping

from nylasclient.context import Context
from nylasclient.models import ListOptions
from nylasclient.query import Request, build_params

if TYPE_CHECKING:
    from nylasclient.client import _BaseClient


def _then(result: Any, fn: Callable[[Any], Any]) -> Any:
    """Apply *fn* to a transport result, awaiting it first when needed."""
    if inspect.isawaitable(result):
        async def chain() -> Any:
            return fn(await result)

        return chain()
    return fn(result)


def _data(response: Any) -> Any:
    return response.data


def _nothing(_: Any) -> None:
    return None


class Service:
    def __init__(self, client: _BaseClient) -> None:
        self._client = client

    def _one(
        self,
        method: str,
        path: str,
        model: Any,
        *,
        op: str,
        ctx: Context | None,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Wrapped single envelope; returns the decoded ``data``."""
        request = Request(method, path, params=params, body=body)
        return _then(self._client.execute(request, model, op=op, ctx=ctx), _data)

    def _no_content(
        self,
        method: str,
        path: str,
        *,
        op: str,
        ctx: Context | None,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        request = Request(method, path, params=params, body=body)
        return _then(self._client.execute(request, None, op=op, ctx=ctx), _nothing)

    def _raw(
        self,
        method: str,
        path: str,
        model: Any,
        *,
        op: str,
        ctx: Context | None,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        request = Request(method, path, params=params, body=body)
        return self._client.execute_raw(request, model, op=op, ctx=ctx)

    def _page(
        self,
        path: str,
        model: Any,
        options: ListOptions | None,
        *,
        op: str,
        ctx: Context | None,
        **extra: Any,
    ) -> Any:
        """One page of a list endpoint as a :class:`~nylasclient.models.ListResponse`."""
        request = Request("GET", path, params=build_params(options, **extra))
        return self._client.execute_list(request, model, op=op, ctx=ctx)

    def _all(
        self,
        path: str,
        model: Any,
        options: ListOptions | None,
        *,
        op: str,
        ctx: Context | None,
        **extra: Any,
    ) -> Any:
        """Cursor iterator over every page of a list endpoint."""
        base = options if options is not None else ListOptions()

        def page_request(cursor: str) -> Request:
            params = build_params(base.with_page_token(cursor), **extra)
            return Request("GET", path, params=params)

        return self._client.iterate(page_request, model, op=op, ctx=ctx)
