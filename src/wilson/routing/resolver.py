"""Page resolver — turns one source into the routes it generates.

Resolution depends on the source's frontmatter ``type``:

- ``content`` (the default): one route at the file's own location.
- ``select``: the content pages matching ``selectedTerms`` under
  ``taxonomyName``, paginated.
- ``taxonomy``: for every term observed under ``taxonomyName``, the content
  pages carrying that term, paginated, at the ``permalink`` with the term
  placeholder replaced by the term's slug.
- ``terms``: one route listing every term under ``taxonomyName``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wilson._errors import InvalidSource
from wilson.routing.models import PageProps, Query, Route, TermLink
from wilson.routing.paths import (
    chunk,
    has_term_placeholder,
    normalize_route,
    page_path_to_route,
    paginated_route,
    pagination_for,
    replace_term,
    to_slug,
)

if TYPE_CHECKING:
    from wilson._types import Frontmatter, RoutePath
    from wilson.config import WilsonConfig
    from wilson.content.sources import Source
    from wilson.observability.collector import EngineCollector
    from wilson.routing.models import ContentSummary
    from wilson.routing.taxonomy import TaxonomyIndex


def transform_frontmatter(frontmatter: Frontmatter, term: str | None = None) -> Frontmatter:
    """Page frontmatter for a route: ``permalink`` removed, title placeholder filled."""
    result = {k: v for k, v in frontmatter.items() if k != "permalink"}
    title = result.get("title")
    if term is not None and isinstance(title, str):
        result["title"] = replace_term(title, term)
    return result


class PageResolver:
    """Resolves sources into routes against a taxonomy index.

    Args:
        config: Site configuration (extensions, page size).
        index: Taxonomy index over the same registry the sources come from.
        collector: Optional event collector.

    """

    def __init__(
        self,
        config: WilsonConfig,
        index: TaxonomyIndex,
        *,
        collector: EngineCollector | None = None,
    ) -> None:
        self._config = config
        self._index = index
        self._collector = collector

    def resolve(self, source: Source) -> tuple[Route, ...]:
        """Produce every route ``source`` generates.

        Raises:
            InvalidSource: If a taxonomy source has no usable ``permalink``.

        """
        page_type = source.page_type
        if page_type == "select":
            routes = self._resolve_select(source)
        elif page_type == "taxonomy":
            routes = self._resolve_taxonomy(source)
        elif page_type == "terms":
            routes = self._resolve_terms(source)
        else:
            routes = self._resolve_content(source)

        if self._collector is not None:
            self._collector.record_resolve(
                str(source.absolute_path), page_type=page_type, routes=len(routes),
            )
        return routes

    def base_route(self, source: Source) -> RoutePath:
        return page_path_to_route(source.page_path, self._config.extensions)

    def _resolve_content(self, source: Source) -> tuple[Route, ...]:
        return (
            Route(
                route=self.base_route(source),
                source_path=source.absolute_path,
                props=PageProps(frontmatter=transform_frontmatter(source.frontmatter)),
            ),
        )

    def _resolve_terms(self, source: Source) -> tuple[Route, ...]:
        links = tuple(
            TermLink(term=term, slug=to_slug(term))
            for term in self._index.terms(source.taxonomy_name)
        )
        return (
            Route(
                route=self.base_route(source),
                source_path=source.absolute_path,
                props=PageProps(
                    frontmatter=transform_frontmatter(source.frontmatter),
                    terms=links,
                ),
            ),
        )

    def _resolve_select(self, source: Source) -> tuple[Route, ...]:
        matches = self._index.content_pages(source.taxonomy_name, source.selected_terms)
        return self._paginate(
            source,
            matches,
            base_route=self.base_route(source),
            frontmatter=transform_frontmatter(source.frontmatter),
        )

    def _resolve_taxonomy(self, source: Source) -> tuple[Route, ...]:
        permalink = source.frontmatter.get("permalink")
        if not isinstance(permalink, str) or not permalink:
            msg = f"{source.absolute_path}: taxonomy pages need a permalink"
            raise InvalidSource(msg)
        if not has_term_placeholder(permalink):
            msg = f"{source.absolute_path}: permalink {permalink!r} has no [term] placeholder"
            raise InvalidSource(msg)

        routes: list[Route] = []
        for term in self._index.terms(source.taxonomy_name):
            matches = self._index.content_pages(source.taxonomy_name, (term,))
            routes.extend(
                self._paginate(
                    source,
                    matches,
                    base_route=normalize_route(replace_term(permalink, to_slug(term))),
                    frontmatter=transform_frontmatter(source.frontmatter, term),
                    term=term,
                )
            )
        return tuple(routes)

    def _paginate(
        self,
        source: Source,
        matches: tuple[ContentSummary, ...],
        *,
        base_route: RoutePath,
        frontmatter: Frontmatter,
        term: str | None = None,
    ) -> tuple[Route, ...]:
        size = self._config.page_size
        routes: list[Route] = []
        for i, pages in enumerate(chunk(matches, size), start=1):
            routes.append(
                Route(
                    route=paginated_route(base_route, i),
                    source_path=source.absolute_path,
                    query=Query(page=i, selected_term=term),
                    props=PageProps(
                        frontmatter=frontmatter,
                        pages=pages,
                        pagination=pagination_for(base_route, i, len(matches), size),
                        term=term,
                    ),
                )
            )
        return tuple(routes)
