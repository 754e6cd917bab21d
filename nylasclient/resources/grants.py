"""Grants: connected email and calendar accounts.

The grants list endpoint pages by ``offset``/``limit`` rather than by
cursor, so :meth:`GrantsService.list_all` walks it with an offset
iterator that stops after the first short page.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.query import Request, build_params
from nylasclient.resources.base import Service

DEFAULT_PAGE_SIZE = 50


class Grant(Record):
    id: str
    provider: str = ""
    grant_status: str | None = None
    email: str | None = None
    scope: list[str] = Field(default_factory=list)
    user_agent: str | None = None
    ip: str | None = None
    state: str | None = None
    created_at: int | None = None
    updated_at: int | None = None
    settings: dict[str, Any] = Field(default_factory=dict)


class GrantListOptions(ListOptions):
    offset: int | None = None
    sort_by: str | None = None
    order_by: str | None = None
    since: int | None = None
    before: int | None = None
    email: str | None = None
    grant_status: str | None = None
    ip: str | None = None
    provider: str | None = None


class UpdateGrantRequest(RequestBody):
    settings: dict[str, Any] | None = None
    scope: list[str] | None = None


class GrantsService(Service):
    def list(
        self, options: GrantListOptions | None = None, *, ctx: Context | None = None
    ) -> ListResponse[Grant]:
        return self._page("/v3/grants", Grant, options, op="grants.list", ctx=ctx)

    def list_all(
        self, options: GrantListOptions | None = None, *, ctx: Context | None = None
    ) -> Iterator[Grant]:
        base = options if options is not None else GrantListOptions()
        limit = base.limit or DEFAULT_PAGE_SIZE

        def page_request(offset: int, limit: int) -> Request:
            params = build_params(base, offset=offset, limit=limit)
            return Request("GET", "/v3/grants", params=params)

        return self._client.iterate_offset(
            page_request, Grant, limit, op="grants.list_all", ctx=ctx
        )

    def get(self, grant_id: str, *, ctx: Context | None = None) -> Grant:
        return self._one(
            "GET", f"/v3/grants/{grant_id}", Grant,
            op=f"grants.get({grant_id})", ctx=ctx,
        )

    def update(
        self, grant_id: str, request: UpdateGrantRequest, *, ctx: Context | None = None
    ) -> Grant:
        return self._one(
            "PATCH", f"/v3/grants/{grant_id}", Grant,
            body=request, op=f"grants.update({grant_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}",
            op=f"grants.delete({grant_id})", ctx=ctx,
        )
