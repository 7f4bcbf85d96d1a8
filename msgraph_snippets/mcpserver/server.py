"""FastMCP server exposing the snippet catalogs as MCP tools."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import HTTPException
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from ..api.service import ClientFactory, list_snippets_service, run_snippet_service
from ..exception_handler import configure_logging
from ..graph.client import GraphClient
from ..graph.config import GraphSettings
from ..snippet import SnippetCategory, SnippetRegistry

logger = logging.getLogger("msgraph_snippets")


class ServiceContext:
    """Lazy dependency container for MCP tool handlers."""

    def __init__(
        self,
        *,
        settings: GraphSettings | None = None,
        registry: SnippetRegistry | None = None,
        client_factory: ClientFactory = GraphClient,
    ) -> None:
        self._settings = settings
        self._registry = registry
        self.client_factory = client_factory

    @property
    def settings(self) -> GraphSettings:
        if self._settings is None:
            self._settings = GraphSettings.from_env()
            configure_logging(self._settings.log_level)
        return self._settings

    def registry(self) -> SnippetRegistry:
        if self._registry is None:
            self._registry = SnippetRegistry()
        return self._registry


def _handle_http_exception(exc: HTTPException, *, default_message: str) -> ToolError:
    detail = exc.detail if isinstance(exc.detail, str) else None
    message = detail or default_message
    return ToolError(message)


def list_snippets_tool(services: ServiceContext, category: str | None = None) -> List[Dict[str, Any]]:
    """Runnable catalog entries, optionally limited to one category."""
    try:
        selected = SnippetCategory(category) if category else None
    except ValueError:
        raise ToolError(f"Unknown category: {category}")

    summaries = list_snippets_service(services.registry(), selected)
    return [summary.model_dump(mode="json") for summary in summaries if not summary.is_marker]


async def run_snippet_tool(services: ServiceContext, snippet_id: str) -> Dict[str, Any]:
    """Run one snippet; Graph failures surface as ``ToolError``."""
    if not snippet_id or not snippet_id.strip():
        raise ToolError("Snippet id is required.")

    try:
        response = await run_snippet_service(
            snippet_id.strip(),
            services.registry(),
            services.settings,
            client_factory=services.client_factory,
        )
    except HTTPException as exc:
        raise _handle_http_exception(exc, default_message="Snippet run failed")

    if not response.succeeded:
        status = f" (HTTP {response.status_code})" if response.status_code else ""
        raise ToolError(f"Snippet {response.id} failed{status}: {response.error}")

    return response.model_dump(mode="json")


def create_server(services: ServiceContext | None = None) -> FastMCP:
    """Create a FastMCP server wired to the snippet services."""

    services = services or ServiceContext()
    server = FastMCP("Graph Snippets MCP Server")

    @server.tool(
        name="list_snippets",
        description=(
            "List the Microsoft Graph snippets that can be run. Pass `category`"
            " ('drives' or 'users') to list a single catalog."
        ),
        tags={"snippets", "catalog"},
    )
    def list_snippets(category: str | None = None) -> List[Dict[str, Any]]:
        return list_snippets_tool(services, category)

    @server.tool(
        name="run_snippet",
        description=(
            "Run one snippet by id (for example `drives.get_me_drive`) against Microsoft"
            " Graph using the server's configured access token."
        ),
        tags={"snippets", "graph"},
    )
    async def run_snippet(snippet_id: str) -> Dict[str, Any]:
        return await run_snippet_tool(services, snippet_id)

    return server


mcp = create_server()

__all__ = ["mcp", "create_server", "ServiceContext", "list_snippets_tool", "run_snippet_tool"]
