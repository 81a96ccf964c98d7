"""Composite search index — name lookup across views and their items.

A ``SearchIndex`` answers two questions for a query token:

* ``find(token)`` — exact matches, used to jump straight to a page.
* ``suggest(token)`` — partial (case-insensitive substring) matches,
  used for auto-completion.

``SearchIndexBuilder`` composes identity entries and sub-indexes into one
``UnionSearchIndex``.  Adapters hold no state of their own; every query
is delegated to the owner's lookup callables.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class SearchHit(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    url: str


@runtime_checkable
class SearchIndex(Protocol):
    def find(self, token: str) -> list[SearchHit]: ...

    def suggest(self, token: str) -> list[SearchHit]: ...


class _Named(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def url(self) -> str: ...


class CollectionSearchIndex:
    """Search adapter over a named collection.

    Parameters
    ----------
    get:
        Name -> object lookup; returns ``None`` for unknown names.
    all:
        Full enumeration of the collection.
    """

    def __init__(
        self,
        get: Callable[[str], _Named | None],
        all: Callable[[], Iterable[_Named]],  # noqa: A002
    ) -> None:
        self._get = get
        self._all = all

    def find(self, token: str) -> list[SearchHit]:
        found = self._get(token)
        if found is None:
            return []
        return [SearchHit(name=found.name, url=found.url)]

    def suggest(self, token: str) -> list[SearchHit]:
        needle = token.lower()
        return [
            SearchHit(name=obj.name, url=obj.url)
            for obj in self._all()
            if needle in obj.name.lower()
        ]


class FixedSetSearchIndex:
    """Static entries, e.g. the identity entry of a view."""

    def __init__(self, hits: Sequence[SearchHit]) -> None:
        self._hits = tuple(hits)

    def find(self, token: str) -> list[SearchHit]:
        return [h for h in self._hits if h.name == token]

    def suggest(self, token: str) -> list[SearchHit]:
        needle = token.lower()
        return [h for h in self._hits if needle in h.name.lower()]


class UnionSearchIndex:
    """Concatenates the answers of several indexes, de-duplicating by URL."""

    def __init__(self, indexes: Sequence[SearchIndex]) -> None:
        self._indexes = tuple(indexes)

    def _merge(self, results: Iterable[list[SearchHit]]) -> list[SearchHit]:
        seen: set[str] = set()
        merged: list[SearchHit] = []
        for hits in results:
            for hit in hits:
                if hit.url not in seen:
                    seen.add(hit.url)
                    merged.append(hit)
        return merged

    def find(self, token: str) -> list[SearchHit]:
        return self._merge(index.find(token) for index in self._indexes)

    def suggest(self, token: str) -> list[SearchHit]:
        return self._merge(index.suggest(token) for index in self._indexes)


class SearchIndexBuilder:
    """Fluent builder for a ``UnionSearchIndex``."""

    def __init__(self) -> None:
        self._identity: list[SearchHit] = []
        self._indexes: list[SearchIndex] = []

    def add(self, url: str, *names: str) -> SearchIndexBuilder:
        for name in names:
            self._identity.append(SearchHit(name=name, url=url))
        return self

    def add_index(self, index: SearchIndex) -> SearchIndexBuilder:
        self._indexes.append(index)
        return self

    def make(self) -> UnionSearchIndex:
        indexes: list[SearchIndex] = []
        if self._identity:
            indexes.append(FixedSetSearchIndex(self._identity))
        indexes.extend(self._indexes)
        return UnionSearchIndex(indexes)
