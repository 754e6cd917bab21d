"""Email folders and labels."""

from __future__ import annotations

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service


class Folder(Record):
    id: str
    grant_id: str = ""
    name: str = ""
    parent_id: str | None = None
    background_color: str | None = None
    text_color: str | None = None
    system_folder: bool = False
    child_count: int | None = None
    unread_count: int | None = None
    total_count: int | None = None


class FolderListOptions(ListOptions):
    parent_id: str | None = None


class FolderRequest(RequestBody):
    name: str | None = None
    parent_id: str | None = None
    background_color: str | None = None
    text_color: str | None = None


class FoldersService(Service):
    def list(
        self,
        grant_id: str,
        options: FolderListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Folder]:
        return self._page(
            f"/v3/grants/{grant_id}/folders", Folder, options,
            op="folders.list", ctx=ctx,
        )

    def list_all(
        self,
        grant_id: str,
        options: FolderListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Folder]:
        return self._all(
            f"/v3/grants/{grant_id}/folders", Folder, options,
            op="folders.list_all", ctx=ctx,
        )

    def get(self, grant_id: str, folder_id: str, *, ctx: Context | None = None) -> Folder:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/folders/{folder_id}", Folder,
            op=f"folders.get({folder_id})", ctx=ctx,
        )

    def create(
        self, grant_id: str, request: FolderRequest, *, ctx: Context | None = None
    ) -> Folder:
        return self._one(
            "POST", f"/v3/grants/{grant_id}/folders", Folder,
            body=request, op="folders.create", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        folder_id: str,
        request: FolderRequest,
        *,
        ctx: Context | None = None,
    ) -> Folder:
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/folders/{folder_id}", Folder,
            body=request, op=f"folders.update({folder_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, folder_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/folders/{folder_id}",
            op=f"folders.delete({folder_id})", ctx=ctx,
        )
