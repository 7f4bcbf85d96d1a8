"""FastAPI application factory for the snippets service."""

from __future__ import annotations

from fastapi import FastAPI

from ..exception_handler import configure_logging
from ..graph.config import GraphSettings
from ..mcpserver import mcp
from ..snippet import SnippetRegistry
from .route import router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    # setup mcp
    mcp_app = mcp.http_app("/")

    settings = GraphSettings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Microsoft Graph Snippets API",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )
    app.state.settings = settings
    app.state.registry = SnippetRegistry()
    app.include_router(router)

    # mount mcp
    app.mount("/mcp", mcp_app)

    return app


app = create_app()


__all__ = ["app", "create_app"]
