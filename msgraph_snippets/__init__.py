"""Microsoft Graph drive and user snippets."""

from .graph import GraphClient, GraphSettings, RequestFailed
from .snippet import (
    SnippetCategory,
    SnippetDescriptor,
    SnippetRegistry,
    build_catalog,
    get_drives_snippets,
    get_users_snippets,
    run_snippet,
)

__all__ = [
    "GraphClient",
    "GraphSettings",
    "RequestFailed",
    "SnippetCategory",
    "SnippetDescriptor",
    "SnippetRegistry",
    "build_catalog",
    "get_drives_snippets",
    "get_users_snippets",
    "run_snippet",
]
