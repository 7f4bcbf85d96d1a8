"""Snippet catalogs and the helpers to run them."""

from .callback import Failure, FutureCallback, ResultCallback, SnippetResult, Success, run_snippet
from .descriptions import SnippetDescription, describe
from .drives import get_drives_snippets
from .model import SnippetCategory, SnippetDescriptor
from .registry import SnippetRegistry, UnknownSnippetError, build_catalog
from .users import SnippetNotImplementedError, get_users_snippets

__all__ = [
    "Failure",
    "FutureCallback",
    "ResultCallback",
    "SnippetResult",
    "Success",
    "run_snippet",
    "SnippetDescription",
    "describe",
    "get_drives_snippets",
    "get_users_snippets",
    "SnippetCategory",
    "SnippetDescriptor",
    "SnippetRegistry",
    "UnknownSnippetError",
    "SnippetNotImplementedError",
    "build_catalog",
]
