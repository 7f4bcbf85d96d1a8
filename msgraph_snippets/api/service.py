"""Service-layer helpers for listing and running snippets."""

from __future__ import annotations

import logging
from typing import Any, Callable, List

from fastapi import HTTPException
from pydantic import BaseModel

from ..graph.client import GraphClient
from ..graph.config import GraphSettings
from ..graph.errors import RequestFailed
from ..snippet import (
    Failure,
    SnippetCategory,
    SnippetRegistry,
    SnippetResult,
    UnknownSnippetError,
    run_snippet,
)
from .model import SnippetRunResponse, SnippetSummary

logger = logging.getLogger("msgraph_snippets")

ClientFactory = Callable[[GraphSettings], GraphClient]


def encode_value(value: Any) -> Any:
    """Turn a snippet's success value into something JSON can carry."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


def result_to_response(snippet_id: str, result: SnippetResult) -> SnippetRunResponse:
    if isinstance(result, Failure):
        error = result.error
        status_code = error.status_code if isinstance(error, RequestFailed) else None
        return SnippetRunResponse(
            id=snippet_id,
            succeeded=False,
            status_code=status_code,
            error=str(error) or error.__class__.__name__,
            error_type=error.__class__.__name__,
        )

    return SnippetRunResponse(
        id=snippet_id,
        succeeded=True,
        status_code=result.raw.status_code if result.raw is not None else None,
        value=encode_value(result.value),
    )


def list_snippets_service(
    registry: SnippetRegistry,
    category: SnippetCategory | None = None,
) -> List[SnippetSummary]:
    descriptors = registry.all() if category is None else registry.by_category(category)
    return [SnippetSummary.from_descriptor(descriptor) for descriptor in descriptors]


def get_snippet_service(snippet_id: str, registry: SnippetRegistry) -> SnippetSummary:
    try:
        descriptor = registry.get(snippet_id)
    except UnknownSnippetError:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return SnippetSummary.from_descriptor(descriptor)


async def run_snippet_service(
    snippet_id: str,
    registry: SnippetRegistry,
    settings: GraphSettings,
    *,
    client_factory: ClientFactory = GraphClient,
) -> SnippetRunResponse:
    try:
        descriptor = registry.get(snippet_id)
    except UnknownSnippetError:
        raise HTTPException(status_code=404, detail="Snippet not found")

    if descriptor.is_marker:
        raise HTTPException(status_code=400, detail="Marker entries cannot be run")
    if not settings.access_token:
        raise HTTPException(status_code=401, detail="A Graph access token is required")

    client = client_factory(settings)
    try:
        result = await run_snippet(descriptor, client)
    except Exception as exc:
        logger.exception("Snippet %s raised unexpectedly", snippet_id)
        raise HTTPException(status_code=500, detail=f"Snippet run failed: {exc}") from exc
    finally:
        await client.aclose()

    if isinstance(result, Failure):
        logger.info("Snippet %s failed: %s", snippet_id, result.error)

    return result_to_response(snippet_id, result)


__all__ = [
    "ClientFactory",
    "encode_value",
    "result_to_response",
    "list_snippets_service",
    "get_snippet_service",
    "run_snippet_service",
]
