from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .drives import get_drives_snippets
from .model import SnippetCategory, SnippetDescriptor
from .users import get_users_snippets


class UnknownSnippetError(KeyError):
    """Raised when a snippet id is not present in the registry."""


def build_catalog() -> Tuple[SnippetDescriptor, ...]:
    """Every catalog, in category order, markers included."""
    return get_drives_snippets() + get_users_snippets()


class SnippetRegistry:
    """Lookup of catalog entries by id."""

    def __init__(self, descriptors: Iterable[SnippetDescriptor] | None = None) -> None:
        self._ordered: List[SnippetDescriptor] = list(
            build_catalog() if descriptors is None else descriptors
        )
        self._by_id: Dict[str, SnippetDescriptor] = {}
        for descriptor in self._ordered:
            if descriptor.id in self._by_id:
                raise ValueError(f"Duplicate snippet id: {descriptor.id}")
            self._by_id[descriptor.id] = descriptor

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, snippet_id: object) -> bool:
        return snippet_id in self._by_id

    def all(self) -> List[SnippetDescriptor]:
        return list(self._ordered)

    def get(self, snippet_id: str) -> SnippetDescriptor:
        try:
            return self._by_id[snippet_id]
        except KeyError:
            raise UnknownSnippetError(snippet_id) from None

    def by_category(self, category: SnippetCategory | str) -> List[SnippetDescriptor]:
        category = SnippetCategory(category)
        return [descriptor for descriptor in self._ordered if descriptor.category is category]

    def runnable(self, category: SnippetCategory | str | None = None) -> List[SnippetDescriptor]:
        descriptors = self._ordered if category is None else self.by_category(category)
        return [descriptor for descriptor in descriptors if not descriptor.is_marker]


__all__ = ["SnippetRegistry", "UnknownSnippetError", "build_catalog"]
