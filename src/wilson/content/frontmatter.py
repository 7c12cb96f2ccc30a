"""Frontmatter extraction for Markdown and Python page sources.

Markdown pages carry a YAML block between ``---`` fences, parsed with
python-frontmatter. Python pages bind a dict literal to the module-level
name ``frontmatter``; it is read statically (see ``wilson.content.literal``).

Extraction results are cached by a hash of the raw content, so byte-identical
files share one parse. The cache lives in a ``FrontmatterCache`` owned by the
caller rather than in module state.
"""

from __future__ import annotations

import ast
import hashlib
from pathlib import Path
from typing import TYPE_CHECKING

import frontmatter as frontmatter_parser
import yaml

from wilson._errors import InvalidSource, ParseFailure
from wilson.config import EXTENSION_KINDS
from wilson.content.literal import UnsafeLiteral, find_frontmatter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wilson._types import FileKind, Frontmatter
    from wilson.observability.collector import EngineCollector


def content_digest(content: str) -> str:
    """Return the hex digest used to key caches on raw content."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()  # noqa: S324


def kind_for(path: Path, extensions: Iterable[str]) -> FileKind:
    """Map a page path to its file kind.

    Raises:
        InvalidSource: If the extension is not one of ``extensions``.

    """
    suffix = Path(path).suffix
    if suffix not in tuple(extensions) or suffix not in EXTENSION_KINDS:
        msg = f"{path} does not have a recognized page extension"
        raise InvalidSource(msg)
    return EXTENSION_KINDS[suffix]  # type: ignore[return-value]


class FrontmatterCache:
    """Content-hash keyed store of extracted frontmatter.

    Unbounded: entries live as long as the cache does. Engines create one
    per ``resolve_all`` so stale entries go with the old route table.

    """

    __slots__ = ("_entries", "hits", "misses")

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], Frontmatter] = {}
        self.hits = 0
        self.misses = 0

    def get(self, kind: str, digest: str) -> Frontmatter | None:
        entry = self._entries.get((kind, digest))
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def put(self, kind: str, digest: str, value: Frontmatter) -> None:
        self._entries[(kind, digest)] = value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


def parse_markdown_frontmatter(content: str) -> Frontmatter:
    """Parse the YAML frontmatter block of a Markdown source."""
    try:
        post = frontmatter_parser.loads(content)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        msg = f"Malformed frontmatter block: {exc}"
        raise ParseFailure(msg) from exc
    return dict(post.metadata)


def parse_python_frontmatter(content: str) -> Frontmatter:
    """Statically read the ``frontmatter`` literal of a Python source.

    Returns an empty mapping when the module declares none.
    """
    try:
        module = ast.parse(content)
    except SyntaxError as exc:
        msg = f"Invalid Python page source: {exc}"
        raise ParseFailure(msg) from exc
    try:
        data = find_frontmatter(module)
    except UnsafeLiteral as exc:
        msg = f"frontmatter is not a plain literal: {exc}"
        raise ParseFailure(msg) from exc
    return data if data is not None else {}


_PARSERS = {
    "markdown": parse_markdown_frontmatter,
    "python": parse_python_frontmatter,
}


def extract(content: str, kind: FileKind, *, cache: FrontmatterCache | None = None) -> Frontmatter:
    """Extract the frontmatter mapping from raw source content.

    Args:
        content: Raw file content.
        kind: How the frontmatter is embedded.
        cache: Optional content-hash cache consulted before parsing.

    Raises:
        ParseFailure: If the frontmatter is malformed.

    """
    parser = _PARSERS[kind]
    if cache is None:
        return parser(content)

    digest = content_digest(content)
    cached = cache.get(kind, digest)
    if cached is not None:
        return cached
    value = parser(content)
    cache.put(kind, digest, value)
    return value


class FrontmatterExtractor:
    """Extracts frontmatter for page files, through a shared cache.

    Args:
        extensions: Recognized page extensions.
        cache: Content-hash cache; a fresh one is created when omitted.
        collector: Optional event collector.

    """

    def __init__(
        self,
        extensions: Iterable[str],
        *,
        cache: FrontmatterCache | None = None,
        collector: EngineCollector | None = None,
    ) -> None:
        self._extensions = tuple(extensions)
        self._cache = cache if cache is not None else FrontmatterCache()
        self._collector = collector

    @property
    def cache(self) -> FrontmatterCache:
        return self._cache

    def extract_file(self, path: Path, content: str) -> Frontmatter:
        """Extract frontmatter for the page at ``path`` from its content.

        Raises:
            InvalidSource: If ``path`` has an unrecognized extension.
            ParseFailure: If the frontmatter is malformed.

        """
        kind = kind_for(path, self._extensions)
        hits = self._cache.hits
        try:
            value = extract(content, kind, cache=self._cache)
        except ParseFailure as exc:
            msg = f"{path}: {exc}"
            raise ParseFailure(msg) from exc
        if self._collector is not None:
            self._collector.record_extract(
                str(path), kind=kind, cache_hit=self._cache.hits > hits,
            )
        return value
