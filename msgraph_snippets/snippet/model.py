from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable

if TYPE_CHECKING:
    from ..graph.client import GraphClient
    from .callback import ResultCallback

SnippetRequest = Callable[["GraphClient", "ResultCallback"], Awaitable[None]]


class SnippetCategory(str, enum.Enum):
    DRIVES = "drives"
    USERS = "users"


@dataclass(frozen=True, slots=True)
class SnippetDescriptor:
    """A single catalog entry: what to show and what to run."""

    id: str
    category: SnippetCategory
    description_ref: str | None
    request: SnippetRequest
    http_method: str | None = None
    path_template: str | None = None
    doc_url: str | None = None

    @property
    def is_marker(self) -> bool:
        return self.description_ref is None


async def _no_request(client: "GraphClient", callback: "ResultCallback") -> None:
    # Section placeholder; never touches the client.
    return None


def marker(category: SnippetCategory) -> SnippetDescriptor:
    """Build the no-op element that heads every catalog."""
    return SnippetDescriptor(
        id=f"{category.value}.marker",
        category=category,
        description_ref=None,
        request=_no_request,
    )


__all__ = ["SnippetCategory", "SnippetDescriptor", "SnippetRequest", "marker"]
