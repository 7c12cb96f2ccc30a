"""Taxonomy dependency graph — which unedited sources a content edit affects.

Listing pages (``select``, ``taxonomy``, ``terms``) derive their routes
from the taxonomy terms of content pages. When a content page's terms
change, every listing page that could have shown it before *or* can show
it after must be regenerated, even though its own file did not change.

The graph is not stored: it is read off the registry on demand, which is
cheap for the site sizes wilson targets and never goes stale.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from wilson.content.sources import Source, SourceRegistry

type TaxonomyTerms = dict[str, list[str]]


def merge_taxonomy_values(*taxonomies: Mapping[str, Sequence[str]]) -> TaxonomyTerms:
    """Union term lists per taxonomy name, keeping first-seen order."""
    result: TaxonomyTerms = {}
    for mapping in taxonomies:
        for name, terms in mapping.items():
            merged = result.setdefault(name, [])
            for term in terms:
                if term not in merged:
                    merged.append(term)
    return result


def depends_on(source: Source, taxonomies: Mapping[str, Sequence[str]]) -> bool:
    """Whether ``source``'s routes derive from any of the given terms.

    - taxonomy and terms pages depend on every term of their taxonomy;
    - select pages depend only on the terms they select.
    """
    name = source.taxonomy_name
    if name is None or name not in taxonomies:
        return False
    page_type = source.page_type
    if page_type in ("taxonomy", "terms"):
        return True
    if page_type == "select":
        return not set(taxonomies[name]).isdisjoint(source.selected_terms)
    return False


class DependencyGraph:
    """Answers "this content page's terms changed, what else must regenerate?".

    Args:
        registry: The source registry to read listing pages from.

    """

    def __init__(self, registry: SourceRegistry) -> None:
        self._registry = registry

    def dependents(
        self,
        changed: Path,
        taxonomies: Mapping[str, Sequence[str]],
    ) -> list[Source]:
        """Listing sources, other than ``changed``, that depend on ``taxonomies``.

        Registry order. Empty when ``taxonomies`` is empty.
        """
        if not taxonomies:
            return []
        return [
            source
            for source in self._registry
            if source.absolute_path != changed and depends_on(source, taxonomies)
        ]

    def affected_by_edit(
        self,
        changed: Path,
        before: Source | None,
        after: Source | None,
    ) -> list[Source]:
        """Dependents of a content edit, judged on terms before and after it.

        ``before`` / ``after`` are snapshots of the changed source (None when
        it did not exist before, or no longer exists after). Only content
        pages carry terms that listings read, so if the source is a listed
        content page on neither side there are no dependents.
        """
        sides = [s for s in (before, after) if s is not None and s.is_listed]
        if not sides:
            return []
        merged = merge_taxonomy_values(*(s.taxonomies for s in sides))
        return self.dependents(changed, merged)
