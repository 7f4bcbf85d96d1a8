"""Pydantic models for the public API surface."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..snippet import SnippetCategory, SnippetDescriptor, describe


class SnippetSummary(BaseModel):
    id: str
    category: SnippetCategory
    title: str | None = None
    description: str | None = None
    http_method: str | None = None
    path_template: str | None = None
    doc_url: str | None = None
    is_marker: bool = False

    @classmethod
    def from_descriptor(cls, descriptor: SnippetDescriptor) -> "SnippetSummary":
        text = describe(descriptor.description_ref)
        return cls(
            id=descriptor.id,
            category=descriptor.category,
            title=text.title if text else None,
            description=text.description if text else None,
            http_method=descriptor.http_method,
            path_template=descriptor.path_template,
            doc_url=descriptor.doc_url,
            is_marker=descriptor.is_marker,
        )


class SnippetRunResponse(BaseModel):
    id: str
    succeeded: bool
    status_code: int | None = Field(None, description="HTTP status of the final Graph call")
    value: Any = Field(None, description="Decoded body of the final Graph call")
    error: str | None = None
    error_type: str | None = None


__all__ = ["SnippetSummary", "SnippetRunResponse"]
