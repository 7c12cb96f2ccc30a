"""Resolve the bundled example blog end to end."""

from pathlib import Path

import pytest

from wilson.engine import resolve_all

EXAMPLE = Path(__file__).resolve().parents[1] / "examples" / "blog"


@pytest.mark.skipif(not EXAMPLE.is_dir(), reason="example site not present")
class TestExampleBlog:
    def test_routes(self) -> None:
        routes = sorted(entry.route for entry in resolve_all(EXAMPLE).entries())
        assert routes == [
            "/",
            "/blog/",
            "/blog/page-2/",
            "/page1/",
            "/posts/drafting/",
            "/posts/hello-world/",
            "/posts/on-taxonomies/",
            "/tag/intro/",
            "/tag/python/",
            "/tag/static-sites/",
            "/tag/writing/",
            "/tags/",
        ]

    def test_page_renders_from_props(self) -> None:
        table = resolve_all(EXAMPLE)
        route = table.find("/tag/python/")
        assert route is not None
        assert route.props.frontmatter["title"] == "Tag: Python"
        assert [p.frontmatter["title"] for p in route.props.pages or ()] == [
            "Hello World",
            "On Taxonomies",
        ]
