"""Tests for wilson.routing.table and the route records in wilson.routing.models."""

from pathlib import Path

import pytest

from wilson._errors import RouteNotFound
from wilson.routing.models import (
    ContentSummary,
    PageProps,
    Pagination,
    Query,
    Route,
    RouteEntry,
    TermLink,
)
from wilson.routing.table import RouteTable

BLOG = Path("/site/src/pages/blog/index.py")
TAGS = Path("/site/src/pages/tag.py")


def _blog_routes() -> list[Route]:
    return [
        Route(
            route="/blog/",
            source_path=BLOG,
            query=Query(page=1),
            props=PageProps(frontmatter={"title": "Blog"}, pages=(), pagination=Pagination(1)),
        ),
        Route(
            route="/blog/page-2/",
            source_path=BLOG,
            query=Query(page=2),
            props=PageProps(frontmatter={"title": "Blog"}, pages=(), pagination=Pagination(2)),
        ),
    ]


class TestQuery:
    """Query — structured route selector."""

    def test_empty(self) -> None:
        assert Query().to_string() == ""

    def test_page_only(self) -> None:
        assert Query(page=2).to_string() == "page=2"

    def test_term_before_page(self) -> None:
        assert Query(page=1, selected_term="python").to_string() == "selectedTerm=python&page=1"

    def test_term_is_encoded(self) -> None:
        query = Query(page=1, selected_term="C++ & Rust")
        assert Query.parse(query.to_string()) == query

    @pytest.mark.parametrize(
        "value",
        [
            "selectedTerm=x&page=2",
            "page=2&selectedTerm=x",
            {"page": 2, "selectedTerm": "x"},
            {"page": "2", "selected_term": "x"},
            Query(page=2, selected_term="x"),
        ],
    )
    def test_parse_forms(self, value: object) -> None:
        assert Query.parse(value) == Query(page=2, selected_term="x")  # type: ignore[arg-type]

    def test_parse_none(self) -> None:
        assert Query.parse(None) == Query()
        assert Query.parse("") == Query()

    def test_as_dict(self) -> None:
        assert Query(page=3, selected_term="x").as_dict() == {"selectedTerm": "x", "page": 3}
        assert Query().as_dict() == {}


class TestPageProps:
    """PageProps.to_dict — plain mapping for the renderer."""

    def test_content_props(self) -> None:
        assert PageProps(frontmatter={"title": "T"}).to_dict() == {"frontmatter": {"title": "T"}}

    def test_listing_props(self) -> None:
        props = PageProps(
            frontmatter={"title": "Tag: x"},
            pages=(ContentSummary(route="/a/", frontmatter={"title": "A"}),),
            pagination=Pagination(current_page=1, next_page="/tag/x/page-2/"),
            term="x",
        )
        assert props.to_dict() == {
            "frontmatter": {"title": "Tag: x"},
            "pages": [{"route": "/a/", "frontmatter": {"title": "A"}}],
            "term": "x",
            "pagination": {
                "currentPage": 1,
                "previousPage": None,
                "nextPage": "/tag/x/page-2/",
            },
        }

    def test_terms_props(self) -> None:
        props = PageProps(terms=(TermLink(term="Web", slug="web"),))
        assert props.to_dict()["terms"] == [{"term": "Web", "slug": "web"}]


class TestRouteTable:
    """RouteTable — keyed by (source path, query string)."""

    def test_add_and_get(self) -> None:
        table = RouteTable(_blog_routes())
        assert len(table) == 2
        route = table.get(BLOG, {"page": 2})
        assert route is not None
        assert route.route == "/blog/page-2/"

    def test_get_with_string_path_and_query(self) -> None:
        table = RouteTable(_blog_routes())
        route = table.get(str(BLOG), "page=1")
        assert route is not None
        assert route.route == "/blog/"

    def test_get_missing(self) -> None:
        assert RouteTable(_blog_routes()).get(BLOG, {"page": 3}) is None

    def test_key(self) -> None:
        table = RouteTable(_blog_routes())
        assert (BLOG, "page=1") in table
        assert (BLOG, "") not in table

    def test_props(self) -> None:
        table = RouteTable(_blog_routes())
        assert table.props(BLOG, Query(page=2)).pagination == Pagination(2)

    def test_props_not_found(self) -> None:
        table = RouteTable(_blog_routes())
        with pytest.raises(RouteNotFound, match=r"page=3"):
            table.props(BLOG, {"page": 3})

    def test_add_replaces_same_key(self) -> None:
        table = RouteTable(_blog_routes())
        table.add(Route(route="/moved/", source_path=BLOG, query=Query(page=1)))
        assert len(table) == 2
        assert table.find("/moved/") is not None
        assert table.find("/blog/") is None

    def test_remove_source(self) -> None:
        table = RouteTable(_blog_routes())
        table.add(Route(route="/tag/x/", source_path=TAGS, query=Query(1, "x")))
        assert table.remove_source(BLOG) == 2
        assert [r.source_path for r in table] == [TAGS]
        assert table.remove_source(BLOG) == 0

    def test_routes_for(self) -> None:
        table = RouteTable(_blog_routes())
        assert [r.route for r in table.routes_for(BLOG)] == ["/blog/", "/blog/page-2/"]
        assert table.routes_for(TAGS) == []

    def test_add_all_counts(self) -> None:
        assert RouteTable().add_all(_blog_routes()) == 2

    def test_entries(self) -> None:
        entries = RouteTable(_blog_routes()).entries()
        assert entries[1] == RouteEntry(route="/blog/page-2/", source_path=BLOG, query=Query(page=2))
        assert entries[1].as_dict() == {
            "route": "/blog/page-2/",
            "sourcePath": str(BLOG),
            "query": {"page": 2},
        }

    def test_snapshot_ignores_order(self) -> None:
        routes = _blog_routes()
        forward = RouteTable(routes)
        backward = RouteTable(reversed(routes))
        assert forward.snapshot() == backward.snapshot()

    def test_iteration_is_a_copy(self) -> None:
        table = RouteTable(_blog_routes())
        for route in table:
            table.remove_source(route.source_path)
        assert len(table) == 0
