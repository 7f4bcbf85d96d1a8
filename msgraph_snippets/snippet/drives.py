"""Drive snippets: files and folders in the signed-in user's OneDrive."""

from __future__ import annotations

import uuid
from typing import Any, Awaitable, Callable, Tuple

from ..graph import client as graph
from ..graph.client import GraphClient
from ..graph.errors import RequestFailed
from ..graph.models import DriveItem, FolderCreate, GraphResponse, ItemUpdate
from .callback import ResultCallback, forward
from .model import SnippetCategory, SnippetDescriptor, marker

DOCS = "https://graph.microsoft.io/docs/api-reference/v1.0/api"

FILE_CONTENTS = "file contents"
UPDATED_FILE_CONTENTS = "Updated file contents"


def new_item_name() -> str:
    return str(uuid.uuid4())


async def _create_then(
    client: GraphClient,
    callback: ResultCallback,
    *,
    media_type: str,
    then: Callable[[DriveItem], Awaitable[GraphResponse[Any]]],
) -> None:
    """Create a uniquely named file, then run ``then`` on the created item.

    The first failure goes to ``callback`` and ends the chain.
    """
    try:
        created = await client.put_new_file(new_item_name(), FILE_CONTENTS, media_type=media_type)
    except RequestFailed as exc:
        callback.on_failure(exc)
        return

    await forward(callback, then(created.value))


async def get_me_drive(client: GraphClient, callback: ResultCallback) -> None:
    await forward(callback, client.get_drive())


async def get_organization_drives(client: GraphClient, callback: ResultCallback) -> None:
    await forward(callback, client.get_organization_drives())


async def get_me_files(client: GraphClient, callback: ResultCallback) -> None:
    await forward(callback, client.get_current_user_files())


async def create_me_file(client: GraphClient, callback: ResultCallback) -> None:
    await forward(callback, client.put_new_file(new_item_name(), FILE_CONTENTS))


async def download_me_file(client: GraphClient, callback: ResultCallback) -> None:
    await _create_then(
        client,
        callback,
        media_type=graph.TEXT_PLAIN,
        then=lambda item: client.download_file(item.id),
    )


async def update_me_file(client: GraphClient, callback: ResultCallback) -> None:
    await _create_then(
        client,
        callback,
        media_type=graph.TEXT_PLAIN,
        then=lambda item: client.update_file(
            item.id, UPDATED_FILE_CONTENTS, media_type=graph.APPLICATION_JSON
        ),
    )


async def delete_me_file(client: GraphClient, callback: ResultCallback) -> None:
    await _create_then(
        client,
        callback,
        media_type=graph.APPLICATION_JSON,
        then=lambda item: client.delete_file(item.id),
    )


async def rename_me_file(client: GraphClient, callback: ResultCallback) -> None:
    await _create_then(
        client,
        callback,
        media_type=graph.APPLICATION_JSON,
        then=lambda item: client.rename_file(item.id, ItemUpdate(name=new_item_name())),
    )


async def create_me_folder(client: GraphClient, callback: ResultCallback) -> None:
    folder = FolderCreate(name=new_item_name())
    await forward(callback, client.create_folder(folder))


def _snippet(
    description_ref: str,
    request: Callable[[GraphClient, ResultCallback], Awaitable[None]],
    http_method: str,
    path_template: str,
    doc_page: str,
) -> SnippetDescriptor:
    return SnippetDescriptor(
        id=f"{SnippetCategory.DRIVES.value}.{description_ref}",
        category=SnippetCategory.DRIVES,
        description_ref=description_ref,
        request=request,
        http_method=http_method,
        path_template=path_template,
        doc_url=f"{DOCS}/{doc_page}",
    )


def get_drives_snippets() -> Tuple[SnippetDescriptor, ...]:
    return (
        marker(SnippetCategory.DRIVES),
        _snippet("get_me_drive", get_me_drive, "GET", graph.ME_DRIVE, "drive_get"),
        _snippet(
            "get_organization_drives",
            get_organization_drives,
            "GET",
            graph.ORGANIZATION_DRIVES,
            "drive_get",
        ),
        _snippet("get_me_files", get_me_files, "GET", graph.ME_ROOT_CHILDREN, "item_list_children"),
        _snippet(
            "create_me_file",
            create_me_file,
            "PUT",
            graph.ME_ROOT_CHILD_CONTENT,
            "item_post_children",
        ),
        _snippet(
            "download_me_file",
            download_me_file,
            "GET",
            graph.ME_ITEM_CONTENT,
            "item_downloadcontent",
        ),
        _snippet("update_me_file", update_me_file, "PUT", graph.ME_ITEM_CONTENT, "item_update"),
        _snippet("delete_me_file", delete_me_file, "DELETE", graph.ME_ITEM, "item_delete"),
        _snippet("rename_me_file", rename_me_file, "PATCH", graph.ME_ITEM, "item_update"),
        _snippet(
            "create_me_folder",
            create_me_folder,
            "POST",
            graph.ME_ROOT_CHILDREN,
            "item_post_children",
        ),
    )


__all__ = ["get_drives_snippets", "new_item_name", "FILE_CONTENTS", "UPDATED_FILE_CONTENTS"]
