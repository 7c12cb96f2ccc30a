"""Shared test fixtures for wilson."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from wilson.config import WilsonConfig
from wilson.engine import Engine

PAGES_DIR = "src/pages"


def python_page(frontmatter: dict[str, Any], *, body: str = "") -> str:
    """Source of a Python page binding ``frontmatter`` to a dict literal."""
    return (
        "from site_components import Layout\n"
        "\n"
        f"frontmatter = {frontmatter!r}\n"
        "\n"
        "\n"
        "def Page(props):\n"
        f"    return Layout(props, {body!r})\n"
    )


def markdown_page(frontmatter: dict[str, Any], *, body: str = "") -> str:
    """Source of a Markdown page with a YAML frontmatter block."""
    block = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"---\n{block}---\n\n{body}\n"


def page_source(rel: str, frontmatter: dict[str, Any], *, body: str = "") -> str:
    if rel.endswith(".py"):
        return python_page(frontmatter, body=body)
    return markdown_page(frontmatter, body=body)


@pytest.fixture
def write_page() -> Callable[..., Path]:
    """Write a page under ``<root>/src/pages`` and return its absolute path.

    The file kind follows the extension of ``rel``. Pass ``raw`` to write
    content verbatim instead of generating it from ``frontmatter``.
    """

    def _write(
        root: Path,
        rel: str,
        frontmatter: dict[str, Any] | None = None,
        *,
        body: str = "",
        raw: str | None = None,
    ) -> Path:
        path = root / PAGES_DIR / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        content = raw if raw is not None else page_source(rel, frontmatter or {}, body=body)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def page_text() -> Callable[..., str]:
    """Generate page source for a relative path without writing it."""
    return page_source


@pytest.fixture
def tmp_site(tmp_path: Path, write_page: Callable[..., Path]) -> Path:
    """Create a small blog under ``src/pages`` and return the site root.

    Content pages:
        index.md           (no taxonomies)
        posts/first.md     categories [writing], tags [python, Web]
        posts/second.md    categories [writing, blog], tags [python]
        posts/third.md     categories [blog], tags [Ünïcode Tag]

    Listing pages:
        page1.py           select categories [writing]
        blog/index.py      select categories [blog]
        tag-contents.py    taxonomy tags at /tag/[term]/
        tags.py            terms tags
    """
    write_page(tmp_path, "index.md", {"title": "Home"}, body="# Welcome")
    write_page(
        tmp_path,
        "posts/first.md",
        {
            "title": "First",
            "taxonomies": {"categories": ["writing"], "tags": ["python", "Web"]},
        },
        body="Hello from the first post.",
    )
    write_page(
        tmp_path,
        "posts/second.md",
        {
            "title": "Second",
            "taxonomies": {"categories": ["writing", "blog"], "tags": ["python"]},
        },
    )
    write_page(
        tmp_path,
        "posts/third.md",
        {
            "title": "Third",
            "taxonomies": {"categories": ["blog"], "tags": ["Ünïcode Tag"]},
        },
    )
    write_page(
        tmp_path,
        "page1.py",
        {
            "title": "Writing",
            "type": "select",
            "taxonomyName": "categories",
            "selectedTerms": ["writing"],
        },
    )
    write_page(
        tmp_path,
        "blog/index.py",
        {
            "title": "Blog",
            "type": "select",
            "taxonomyName": "categories",
            "selectedTerms": ["blog"],
        },
    )
    write_page(
        tmp_path,
        "tag-contents.py",
        {
            "title": "Tag: [term]",
            "type": "taxonomy",
            "taxonomyName": "tags",
            "permalink": "/tag/[term]/",
        },
    )
    write_page(
        tmp_path,
        "tags.py",
        {"title": "Tags", "type": "terms", "taxonomyName": "tags"},
    )
    return tmp_path


@pytest.fixture
def site_config(tmp_site: Path) -> WilsonConfig:
    return WilsonConfig(root=tmp_site)


@pytest.fixture
def engine(site_config: WilsonConfig) -> Engine:
    """An engine over ``tmp_site`` that has already resolved every route."""
    engine = Engine(site_config)
    engine.resolve_all()
    return engine


@pytest.fixture
def pages_root(tmp_site: Path) -> Path:
    return tmp_site / PAGES_DIR
