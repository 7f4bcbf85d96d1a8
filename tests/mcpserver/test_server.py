import logging

import httpx
import pytest
from fastmcp.exceptions import ToolError

from msgraph_snippets.graph.config import GraphSettings
from msgraph_snippets.graph.errors import RequestFailed
from msgraph_snippets.graph.models import GraphResponse
from msgraph_snippets.mcpserver.server import (
    ServiceContext,
    create_server,
    list_snippets_tool,
    run_snippet_tool,
)
from msgraph_snippets.snippet import SnippetRegistry


class _StubGraphClient:
    def __init__(self, settings, *, error=None):
        self.settings = settings
        self.error = error
        self.closed = False

    async def aclose(self):
        self.closed = True

    async def get_users(self):
        if self.error is not None:
            raise self.error
        raw = httpx.Response(200, json={"value": []})
        return GraphResponse(value={"value": []}, raw=raw)


def _services(*, token="configured", error=None):
    return ServiceContext(
        settings=GraphSettings(access_token=token),
        registry=SnippetRegistry(),
        client_factory=lambda settings: _StubGraphClient(settings, error=error),
    )


def _forbidden():
    request = httpx.Request("GET", "https://graph.microsoft.com/v1.0/myOrganization/users")
    return RequestFailed.from_status_error(
        httpx.HTTPStatusError("Forbidden", request=request, response=httpx.Response(403))
    )


def test_list_snippets_skips_markers():
    entries = list_snippets_tool(_services(), "users")

    assert [entry["id"] for entry in entries] == [
        "users.get_organization_users",
        "users.get_organization_filtered_users",
        "users.insert_organization_user",
    ]
    assert all(entry["is_marker"] is False for entry in entries)


def test_list_snippets_rejects_unknown_category():
    with pytest.raises(ToolError):
        list_snippets_tool(_services(), "calendars")


@pytest.mark.asyncio
async def test_run_snippet_returns_success_payload():
    result = await run_snippet_tool(_services(), "users.get_organization_users")

    assert result["succeeded"] is True
    assert result["status_code"] == 200
    assert result["value"] == {"value": []}


@pytest.mark.asyncio
async def test_run_snippet_graph_failure_raises_tool_error():
    with pytest.raises(ToolError, match="HTTP 403"):
        await run_snippet_tool(_services(error=_forbidden()), "users.get_organization_users")


@pytest.mark.asyncio
async def test_run_snippet_maps_caller_errors_to_tool_error():
    services = _services()

    with pytest.raises(ToolError, match="Snippet not found"):
        await run_snippet_tool(services, "users.missing")
    with pytest.raises(ToolError, match="Marker"):
        await run_snippet_tool(services, "users.marker")
    with pytest.raises(ToolError, match="access token"):
        await run_snippet_tool(_services(token=None), "users.get_organization_users")


@pytest.mark.asyncio
async def test_create_server_registers_tools_bound_to_context():
    server = create_server(_services(error=_forbidden()))

    tools = await server.get_tools()

    assert {"list_snippets", "run_snippet"} <= set(tools)
    listed = tools["list_snippets"].fn(category="drives")
    assert listed[0]["id"] == "drives.get_me_drive"
    with pytest.raises(ToolError):
        await tools["run_snippet"].fn(snippet_id="users.get_organization_users")


def test_lazy_settings_configure_package_logger(monkeypatch):
    monkeypatch.setenv("SNIPPETS_LOG_LEVEL", "ERROR")
    monkeypatch.delenv("GRAPH_ACCESS_TOKEN", raising=False)

    settings = ServiceContext().settings

    assert settings.log_level == "ERROR"
    assert logging.getLogger("msgraph_snippets").level == logging.ERROR
