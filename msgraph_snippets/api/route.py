"""FastAPI routes for browsing and running snippets."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Header, Query, Request

from ..graph.client import GraphClient
from ..graph.config import GraphSettings
from ..snippet import SnippetCategory, SnippetRegistry
from .model import SnippetRunResponse, SnippetSummary
from .service import (
    ClientFactory,
    get_snippet_service,
    list_snippets_service,
    run_snippet_service,
)


def get_settings(request: Request) -> GraphSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, GraphSettings):
        raise RuntimeError("Graph settings have not been initialised")
    return settings


def get_registry(request: Request) -> SnippetRegistry:
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        registry = SnippetRegistry()
        request.app.state.registry = registry
    return registry


def get_client_factory(request: Request) -> ClientFactory:
    return getattr(request.app.state, "client_factory", None) or GraphClient


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


router = APIRouter()


@router.get("/snippets", response_model=List[SnippetSummary])
async def list_snippets(
    category: SnippetCategory | None = Query(None, description="Only list this catalog"),
    registry: SnippetRegistry = Depends(get_registry),
) -> List[SnippetSummary]:
    return list_snippets_service(registry, category)


@router.get("/snippets/{snippet_id}", response_model=SnippetSummary)
async def get_snippet(
    snippet_id: str,
    registry: SnippetRegistry = Depends(get_registry),
) -> SnippetSummary:
    return get_snippet_service(snippet_id, registry)


@router.post("/snippets/{snippet_id}/run", response_model=SnippetRunResponse)
async def run_snippet(
    snippet_id: str,
    authorization: str | None = Header(None),
    registry: SnippetRegistry = Depends(get_registry),
    settings: GraphSettings = Depends(get_settings),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> SnippetRunResponse:
    """Run one snippet against Graph with the caller's bearer token."""

    return await run_snippet_service(
        snippet_id,
        registry,
        settings.with_token(_bearer_token(authorization)),
        client_factory=client_factory,
    )


__all__ = ["router"]
