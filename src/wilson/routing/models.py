"""Route records — what the resolver produces and the route table stores.

All records are frozen dataclasses. ``PageProps.to_dict()`` produces the
plain mapping handed to the rendering layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode

from wilson._types import Frontmatter, QueryString, RoutePath


@dataclass(frozen=True, slots=True)
class Query:
    """Structured selector distinguishing routes generated from one source.

    Attributes:
        page: 1-based pagination chunk, for select and taxonomy pages.
        selected_term: The raw term a taxonomy page was generated for.

    """

    page: int | None = None
    selected_term: str | None = None

    def to_string(self) -> QueryString:
        """Serialize as ``selectedTerm=<term>&page=<n>``, omitting absent fields."""
        pairs: list[tuple[str, str]] = []
        if self.selected_term is not None:
            pairs.append(("selectedTerm", self.selected_term))
        if self.page is not None:
            pairs.append(("page", str(self.page)))
        return urlencode(pairs)

    @classmethod
    def parse(cls, value: Query | QueryString | dict[str, Any] | None) -> Query:
        """Build a Query from a query string, a mapping, or None."""
        if isinstance(value, Query):
            return value
        if value is None:
            return cls()
        items = dict(parse_qsl(value)) if isinstance(value, str) else dict(value)
        page = items.get("page")
        term = items.get("selectedTerm", items.get("selected_term"))
        return cls(
            page=int(page) if page is not None else None,
            selected_term=str(term) if term is not None else None,
        )

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.selected_term is not None:
            result["selectedTerm"] = self.selected_term
        if self.page is not None:
            result["page"] = self.page
        return result


@dataclass(frozen=True, slots=True)
class Pagination:
    """Position of a route within its paginated listing.

    ``previous_page`` / ``next_page`` are route paths, None at the ends.
    """

    current_page: int
    previous_page: RoutePath | None = None
    next_page: RoutePath | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "previousPage": self.previous_page,
            "nextPage": self.next_page,
        }


@dataclass(frozen=True, slots=True)
class ContentSummary:
    """A content page as listed by select and taxonomy pages."""

    route: RoutePath
    frontmatter: Frontmatter

    def as_dict(self) -> dict[str, Any]:
        return {"route": self.route, "frontmatter": self.frontmatter}


@dataclass(frozen=True, slots=True)
class TermLink:
    """A taxonomy term and its URL slug."""

    term: str
    slug: str

    def as_dict(self) -> dict[str, Any]:
        return {"term": self.term, "slug": self.slug}


@dataclass(frozen=True, slots=True)
class PageProps:
    """Data handed to rendering for one route."""

    frontmatter: Frontmatter = field(default_factory=dict)
    pages: tuple[ContentSummary, ...] | None = None
    pagination: Pagination | None = None
    term: str | None = None
    terms: tuple[TermLink, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping, leaving out the parts this route does not have."""
        result: dict[str, Any] = {"frontmatter": self.frontmatter}
        if self.pages is not None:
            result["pages"] = [page.as_dict() for page in self.pages]
        if self.term is not None:
            result["term"] = self.term
        if self.terms is not None:
            result["terms"] = [link.as_dict() for link in self.terms]
        if self.pagination is not None:
            result["pagination"] = self.pagination.as_dict()
        return result


type RouteKey = tuple[Path, QueryString]


@dataclass(frozen=True, slots=True)
class Route:
    """One generated, URL-addressable page.

    Attributes:
        route: Normalized URL path.
        source_path: Absolute path of the source it was generated from.
        query: Selector distinguishing it from its siblings.
        props: Data for rendering.

    """

    route: RoutePath
    source_path: Path
    query: Query = field(default_factory=Query)
    props: PageProps = field(default_factory=PageProps)

    @property
    def key(self) -> RouteKey:
        return (self.source_path, self.query.to_string())


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """Manifest entry: what a client-side router needs for one route."""

    route: RoutePath
    source_path: Path
    query: Query

    def as_dict(self) -> dict[str, Any]:
        return {
            "route": self.route,
            "sourcePath": str(self.source_path),
            "query": self.query.as_dict(),
        }
