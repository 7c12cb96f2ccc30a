"""Route path helpers — normalization, slugs, term placeholders, pagination.

All functions here are pure.
"""

from __future__ import annotations

import math
import re
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, TypeVar

from slugify import slugify

from wilson.routing.models import Pagination

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import PurePath

    from wilson._types import RoutePath

T = TypeVar("T")

# ``[term]`` in permalinks and titles; ``${term}`` is accepted too.
TERM_PLACEHOLDER = re.compile(r"\[term\]|\$\{term\}")

INDEX_NAME = "index"


def normalize_route(*segments: str) -> RoutePath:
    """Join URL segments into ``/a/b/`` form.

    Always one leading and one trailing slash, never repeated slashes.
    No segments (or only empty ones) gives ``/``.

    """
    parts = [part for segment in segments for part in str(segment).split("/") if part]
    return "/" + "".join(f"{part}/" for part in parts)


def page_path_to_route(page_path: PurePath | str, extensions: Iterable[str]) -> RoutePath:
    """Route for a page file, given its path relative to the content root.

    The extension is stripped and a trailing ``index`` segment collapses
    into its directory: ``sub/index.py`` -> ``/sub/``, ``a/b.md`` -> ``/a/b/``.

    """
    path = PurePosixPath(str(page_path).replace("\\", "/"))
    if path.suffix in tuple(extensions):
        path = path.with_suffix("")
    parts = list(path.parts)
    if parts and parts[-1] == INDEX_NAME:
        parts.pop()
    return normalize_route(*parts)


def paginated_route(base_route: RoutePath, page: int) -> RoutePath:
    """Route of pagination chunk ``page`` (1-based) under ``base_route``."""
    if page == 1:
        return base_route
    return normalize_route(base_route, f"page-{page}")


def chunk(items: Sequence[T], size: int) -> list[tuple[T, ...]]:
    """Split ``items`` into consecutive groups of ``size``.

    The last group may be short. An empty sequence still yields one empty
    group, so a listing with no matches gets a page.

    """
    if size < 1:
        msg = f"chunk size must be positive, got {size}"
        raise ValueError(msg)
    groups = [tuple(items[i : i + size]) for i in range(0, len(items), size)]
    return groups or [()]


def pagination_for(
    base_route: RoutePath,
    current_page: int,
    total_items: int,
    page_size: int,
) -> Pagination:
    """Pagination block for one chunk, computed against the unchunked count."""
    last_page = math.ceil(total_items / page_size)
    previous_page = None if current_page == 1 else paginated_route(base_route, current_page - 1)
    next_page = (
        None
        if total_items == 0 or current_page >= last_page
        else paginated_route(base_route, current_page + 1)
    )
    return Pagination(
        current_page=current_page,
        previous_page=previous_page,
        next_page=next_page,
    )


def replace_term(template: str, value: str) -> str:
    """Replace the first term placeholder in ``template`` with ``value``."""
    return TERM_PLACEHOLDER.sub(lambda _match: value, template, count=1)


def has_term_placeholder(template: str) -> bool:
    return TERM_PLACEHOLDER.search(template) is not None


def to_slug(term: str) -> str:
    """URL-safe token for a term: transliterated, lowercased, hyphenated."""
    return slugify(str(term), lowercase=True)
