import json

import httpx
import pytest

from msgraph_snippets.graph.client import GraphClient
from msgraph_snippets.graph.config import GraphSettings
from msgraph_snippets.graph.errors import RequestFailed
from msgraph_snippets.graph.models import DriveItem, FolderCreate, ItemUpdate


def _make_client(handler, **settings_kwargs):
    settings = GraphSettings(access_token="token-123", **settings_kwargs)
    return GraphClient(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_drive_sends_bearer_token_and_versioned_path():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "drive-1", "driveType": "business"})

    async with _make_client(handler) as client:
        response = await client.get_drive()

    assert response.value == {"id": "drive-1", "driveType": "business"}
    assert response.status_code == 200
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/v1.0/me/drive"
    assert seen[0].headers["Authorization"] == "Bearer token-123"


@pytest.mark.asyncio
async def test_api_version_comes_from_settings():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"value": []})

    async with _make_client(handler, api_version="beta") as client:
        await client.get_organization_drives()

    assert paths == ["/beta/myOrganization/drives"]


@pytest.mark.asyncio
async def test_put_new_file_uses_media_type_and_parses_item():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "item-9", "name": "notes", "size": 13})

    async with _make_client(handler) as client:
        response = await client.put_new_file("notes", "file contents", media_type="text/plain")

    request = seen[0]
    assert request.method == "PUT"
    assert request.url.path == "/v1.0/me/drive/root/children/notes/content"
    assert request.headers["Content-Type"] == "text/plain"
    assert request.content == b"file contents"
    assert isinstance(response.value, DriveItem)
    assert response.value.id == "item-9"


@pytest.mark.asyncio
async def test_rename_sends_only_the_name():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "item-1", "name": "renamed"})

    async with _make_client(handler) as client:
        response = await client.rename_file("item-1", ItemUpdate(name="renamed"))

    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/v1.0/me/drive/items/item-1"
    assert json.loads(seen[0].content) == {"name": "renamed"}
    assert response.value.name == "renamed"


@pytest.mark.asyncio
async def test_create_folder_payload_sets_conflict_behavior():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "folder-1", "name": "x", "folder": {"childCount": 0}})

    async with _make_client(handler) as client:
        response = await client.create_folder(FolderCreate(name="x"))

    assert bodies == [{"name": "x", "folder": {}, "conflictBehavior": "rename"}]
    assert response.value.is_folder


@pytest.mark.asyncio
async def test_filtered_users_passes_filter_query():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"value": [{"displayName": "Ada"}]})

    async with _make_client(handler) as client:
        response = await client.get_filtered_users("country eq 'United States'")

    assert seen[0].url.path == "/v1.0/myOrganization/users"
    assert seen[0].url.params["$filter"] == "country eq 'United States'"
    assert response.value["value"][0]["displayName"] == "Ada"


@pytest.mark.asyncio
async def test_download_and_delete_return_raw_bodies():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, content=b"file contents")

    async with _make_client(handler) as client:
        downloaded = await client.download_file("item-1")
        deleted = await client.delete_file("item-1")

    assert downloaded.value == b"file contents"
    assert deleted.value is None
    assert deleted.status_code == 204


@pytest.mark.asyncio
async def test_error_status_raises_request_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": {"code": "accessDenied"}})

    async with _make_client(handler) as client:
        with pytest.raises(RequestFailed) as excinfo:
            await client.get_users()

    assert excinfo.value.status_code == 403
    assert isinstance(excinfo.value.cause, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_transport_error_raises_request_failed_without_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _make_client(handler) as client:
        with pytest.raises(RequestFailed) as excinfo:
            await client.get_drive()

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.cause, httpx.ConnectError)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GRAPH_API_VERSION", "beta")
    monkeypatch.setenv("GRAPH_ACCESS_TOKEN", "abc")
    monkeypatch.setenv("GRAPH_TIMEOUT", "not-a-number")

    settings = GraphSettings.from_env()

    assert settings.api_version == "beta"
    assert settings.access_token == "abc"
    assert settings.timeout == 30
    assert settings.client_headers()["Authorization"] == "Bearer abc"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"", b"<html>oops</html>", b'{"name": "no id"}'])
async def test_undecodable_item_body_raises_request_failed(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, content=body)

    async with _make_client(handler) as client:
        with pytest.raises(RequestFailed) as excinfo:
            await client.put_new_file("notes", "file contents")

    assert excinfo.value.status_code == 201
    assert isinstance(excinfo.value.cause, ValueError)


@pytest.mark.asyncio
async def test_non_json_listing_body_raises_request_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"not json")

    async with _make_client(handler) as client:
        with pytest.raises(RequestFailed) as excinfo:
            await client.get_users()

    assert excinfo.value.status_code == 200


def test_with_token_copies_every_other_setting():
    settings = GraphSettings(base_url="https://graph.example", api_version="beta", timeout=5, log_level="DEBUG")

    updated = settings.with_token("fresh")

    assert updated.access_token == "fresh"
    assert (updated.base_url, updated.api_version, updated.timeout, updated.log_level) == (
        "https://graph.example",
        "beta",
        5,
        "DEBUG",
    )
    assert settings.access_token is None
    assert settings.with_token(None) is settings
