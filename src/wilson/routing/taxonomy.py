"""Taxonomy index — term enumeration and term-filtered content listings.

A read-only view over the source registry. ``content_pages`` is memoized;
each memo entry is stamped with the registry generation it was computed
at and is recomputed once the registry has been mutated since.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wilson.routing.models import ContentSummary
from wilson.routing.paths import page_path_to_route

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wilson.content.sources import SourceRegistry


class TaxonomyIndex:
    """Queries over the taxonomies declared by registry sources.

    Args:
        registry: The source registry to read.
        extensions: Page extensions, stripped when deriving routes.

    """

    def __init__(self, registry: SourceRegistry, extensions: Iterable[str]) -> None:
        self._registry = registry
        self._extensions = tuple(extensions)
        self._memo: dict[tuple[str, frozenset[str]], tuple[int, tuple[ContentSummary, ...]]] = {}
        self.hits = 0
        self.misses = 0

    def terms(self, taxonomy_name: str | None) -> tuple[str, ...]:
        """Distinct terms under ``taxonomy_name`` across listed content pages, first-seen order."""
        if taxonomy_name is None:
            return ()
        seen: dict[str, None] = {}
        for source in self._registry:
            if not source.is_listed:
                continue
            for term in source.taxonomies.get(taxonomy_name, ()):
                seen.setdefault(term, None)
        return tuple(seen)

    def content_pages(
        self,
        taxonomy_name: str | None,
        terms: Iterable[str],
    ) -> tuple[ContentSummary, ...]:
        """Content pages tagged with any of ``terms`` under ``taxonomy_name``.

        Registry order; each page as its route and frontmatter.
        """
        if taxonomy_name is None:
            return ()
        key = (taxonomy_name, frozenset(terms))
        generation = self._registry.generation

        entry = self._memo.get(key)
        if entry is not None and entry[0] == generation:
            self.hits += 1
            return entry[1]

        self.misses += 1
        wanted = key[1]
        pages = tuple(
            ContentSummary(
                route=page_path_to_route(source.page_path, self._extensions),
                frontmatter=source.frontmatter,
            )
            for source in self._registry
            if source.is_listed
            and not wanted.isdisjoint(source.taxonomies.get(taxonomy_name, ()))
        )
        self._memo[key] = (generation, pages)
        return pages

    def clear(self) -> None:
        """Drop every memoized listing."""
        self._memo.clear()

    def __len__(self) -> int:
        return len(self._memo)
