"""Markdown body rendering for export.

The frontmatter block is stripped with python-frontmatter and the body is
rendered by Patitas with the table extension enabled.
"""

from __future__ import annotations

from functools import cache

import frontmatter as frontmatter_parser


@cache
def _markdown():  # type: ignore[no-untyped-def]
    from patitas import Markdown

    return Markdown(plugins=["table"])


def markdown_body(source: str) -> str:
    """Return the body of a Markdown page without its frontmatter block."""
    return frontmatter_parser.loads(source).content.strip("\n")


def render_markdown(text: str) -> str:
    """Render Markdown text to HTML."""
    return _markdown()(text)
