"""Typed asynchronous client for the Microsoft Graph drive and user endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping
from urllib.parse import quote

import httpx

from .config import GraphSettings
from .errors import RequestFailed
from .models import DriveItem, FolderCreate, GraphResponse, ItemUpdate

logger = logging.getLogger("msgraph_snippets")

# Path templates; ``{version}`` is filled from GraphSettings.api_version.
ME_DRIVE = "/{version}/me/drive"
ORGANIZATION_DRIVES = "/{version}/myOrganization/drives"
ME_ROOT_CHILDREN = "/{version}/me/drive/root/children"
ME_ROOT_CHILD_CONTENT = "/{version}/me/drive/root/children/{name}/content"
ME_ITEM = "/{version}/me/drive/items/{id}"
ME_ITEM_CONTENT = "/{version}/me/drive/items/{id}/content"
ORGANIZATION_USERS = "/{version}/myOrganization/users"

TEXT_PLAIN = "text/plain"
TEXT_PLAIN_UTF8 = "text/plain; charset=UTF-8"
APPLICATION_JSON = "application/json"


class GraphClient:
    """One coroutine per Graph endpoint used by the snippet catalogs.

    Every method raises :class:`RequestFailed` on transport errors and on
    non-2xx responses. Successful calls return a :class:`GraphResponse`
    holding the decoded body and the raw ``httpx.Response``.
    """

    def __init__(
        self,
        settings: GraphSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=settings.base_url,
            headers=settings.client_headers(),
            timeout=httpx.Timeout(float(settings.timeout)),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "GraphClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # Drives -----------------------------------------------------------------

    async def get_drive(self) -> GraphResponse[Dict[str, Any]]:
        response = await self._send("GET", ME_DRIVE)
        return GraphResponse(value=_decode_json(response), raw=response)

    async def get_organization_drives(self) -> GraphResponse[Dict[str, Any]]:
        response = await self._send("GET", ORGANIZATION_DRIVES)
        return GraphResponse(value=_decode_json(response), raw=response)

    async def get_current_user_files(self) -> GraphResponse[Dict[str, Any]]:
        response = await self._send("GET", ME_ROOT_CHILDREN)
        return GraphResponse(value=_decode_json(response), raw=response)

    async def put_new_file(
        self,
        name: str,
        content: str | bytes,
        *,
        media_type: str = TEXT_PLAIN_UTF8,
    ) -> GraphResponse[DriveItem]:
        """Upload ``content`` as a new file called ``name`` under the drive root."""
        response = await self._send(
            "PUT",
            ME_ROOT_CHILD_CONTENT,
            path_params={"name": name},
            content=_encode(content),
            headers={"Content-Type": media_type},
        )
        return GraphResponse(value=_decode_item(response), raw=response)

    async def download_file(self, item_id: str) -> GraphResponse[bytes]:
        response = await self._send("GET", ME_ITEM_CONTENT, path_params={"id": item_id})
        return GraphResponse(value=response.content, raw=response)

    async def update_file(
        self,
        item_id: str,
        content: str | bytes,
        *,
        media_type: str = TEXT_PLAIN_UTF8,
    ) -> GraphResponse[DriveItem]:
        response = await self._send(
            "PUT",
            ME_ITEM_CONTENT,
            path_params={"id": item_id},
            content=_encode(content),
            headers={"Content-Type": media_type},
        )
        return GraphResponse(value=_decode_item(response), raw=response)

    async def delete_file(self, item_id: str) -> GraphResponse[None]:
        response = await self._send("DELETE", ME_ITEM, path_params={"id": item_id})
        return GraphResponse(value=None, raw=response)

    async def rename_file(self, item_id: str, delta: ItemUpdate) -> GraphResponse[DriveItem]:
        response = await self._send(
            "PATCH",
            ME_ITEM,
            path_params={"id": item_id},
            json=delta.to_payload(),
        )
        return GraphResponse(value=_decode_item(response), raw=response)

    async def create_folder(self, folder: FolderCreate) -> GraphResponse[DriveItem]:
        response = await self._send("POST", ME_ROOT_CHILDREN, json=folder.to_payload())
        return GraphResponse(value=_decode_item(response), raw=response)

    # Users ------------------------------------------------------------------

    async def get_users(self) -> GraphResponse[Dict[str, Any]]:
        response = await self._send("GET", ORGANIZATION_USERS)
        return GraphResponse(value=_decode_json(response), raw=response)

    async def get_filtered_users(self, filter_expression: str) -> GraphResponse[Dict[str, Any]]:
        response = await self._send(
            "GET",
            ORGANIZATION_USERS,
            params={"$filter": filter_expression},
        )
        return GraphResponse(value=_decode_json(response), raw=response)

    async def create_user(self, user: Mapping[str, Any]) -> GraphResponse[Dict[str, Any]]:
        response = await self._send("POST", ORGANIZATION_USERS, json=dict(user))
        return GraphResponse(value=_decode_json(response), raw=response)

    # Transport --------------------------------------------------------------

    def build_path(self, template: str, **path_params: str) -> str:
        quoted = {key: quote(str(value), safe="") for key, value in path_params.items()}
        return template.format(version=self.settings.api_version, **quoted)

    async def _send(
        self,
        method: str,
        template: str,
        *,
        path_params: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        content: bytes | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        path = self.build_path(template, **(path_params or {}))
        logger.debug("Graph %s %s", method, path)

        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                content=content,
                json=json,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Graph %s %s failed with status %d", method, path, exc.response.status_code
            )
            raise RequestFailed.from_status_error(exc) from exc
        except httpx.HTTPError as exc:
            logger.warning("Graph %s %s failed: %s", method, path, exc)
            raise RequestFailed(exc) from exc

        return response


def _encode(content: str | bytes) -> bytes:
    if isinstance(content, bytes):
        return content
    return content.encode("utf-8")


def _json_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    return response.json()


def _decode_json(response: httpx.Response) -> Any:
    try:
        return _json_body(response)
    except ValueError as exc:
        logger.warning("Undecodable Graph response body (status %d)", response.status_code)
        raise RequestFailed(exc, response=response) from exc


def _decode_item(response: httpx.Response) -> DriveItem:
    # Covers empty bodies, non-JSON bodies and items missing required fields.
    try:
        return DriveItem.model_validate(_json_body(response))
    except ValueError as exc:
        logger.warning("Graph response is not a drive item (status %d)", response.status_code)
        raise RequestFailed(exc, response=response) from exc


__all__ = [
    "GraphClient",
    "ME_DRIVE",
    "ORGANIZATION_DRIVES",
    "ME_ROOT_CHILDREN",
    "ME_ROOT_CHILD_CONTENT",
    "ME_ITEM",
    "ME_ITEM_CONTENT",
    "ORGANIZATION_USERS",
    "TEXT_PLAIN",
    "TEXT_PLAIN_UTF8",
    "APPLICATION_JSON",
]
