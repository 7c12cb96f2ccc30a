"""Source registry — the canonical ``path -> Source`` mapping.

Built once by scanning the content root, then mutated record by record as
the incremental updater absorbs edits, additions and deletions.

Enumeration order is insertion order: scan order (sorted relative paths)
followed by files added later. Edits do not move a source.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from wilson._errors import InvalidSource
from wilson.content.frontmatter import FrontmatterExtractor, content_digest
from wilson.content.host import FileSystemHost

if TYPE_CHECKING:
    from collections.abc import Iterator

    from wilson._types import Frontmatter, PageType
    from wilson.config import WilsonConfig
    from wilson.content.host import SourceHost
    from wilson.observability.collector import EngineCollector

PAGE_TYPES = frozenset({"content", "select", "taxonomy", "terms"})


def term_list(value: Any) -> list[str]:
    """Normalize a frontmatter term field to a list of strings.

    ``None`` is empty, a bare scalar is a one-term list, and list members
    are stringified (YAML happily reads ``2024`` as an int).
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


@dataclass(slots=True)
class Source:
    """One page source file.

    Attributes:
        absolute_path: Identity of the source.
        relative_path: Path relative to the site root
            (e.g. ``src/pages/blog/index.py``).
        page_path: Path relative to the content root (e.g. ``blog/index.py``).
        extension: File extension including the dot.
        frontmatter: Extracted frontmatter, replaced wholesale on edit.
        digest: Content hash of the raw content last read for it.

    """

    absolute_path: Path
    relative_path: Path
    page_path: Path
    extension: str
    frontmatter: Frontmatter = field(default_factory=dict)
    digest: str | None = None

    @property
    def page_type(self) -> PageType:
        """The frontmatter ``type``; anything unrecognized is a content page."""
        value = self.frontmatter.get("type")
        if value in PAGE_TYPES:
            return value  # type: ignore[return-value]
        return "content"

    @property
    def is_content(self) -> bool:
        return self.page_type == "content"

    @property
    def is_listed(self) -> bool:
        """Whether listings show this source and read its terms.

        Only an explicit ``content`` type or no type at all. A source with
        an unrecognized type still gets its own content route, but stays
        out of listings.
        """
        return self.frontmatter.get("type") in (None, "content")

    @property
    def taxonomy_name(self) -> str | None:
        value = self.frontmatter.get("taxonomyName")
        return str(value) if value is not None else None

    @property
    def selected_terms(self) -> list[str]:
        return term_list(self.frontmatter.get("selectedTerms"))

    @property
    def taxonomies(self) -> dict[str, list[str]]:
        """Taxonomy name -> term list attached to this source."""
        raw = self.frontmatter.get("taxonomies")
        if not isinstance(raw, dict):
            return {}
        return {str(name): term_list(terms) for name, terms in raw.items()}


class SourceRegistry:
    """Owns every page source, keyed by absolute path.

    Every mutation bumps ``generation`` so derived caches (the taxonomy
    index's content-page memo) can tell when they are stale.

    Args:
        config: Site configuration (content root and extensions).
        host: File access; defaults to ``FileSystemHost``.
        extractor: Frontmatter extractor; a fresh one (with its own cache)
            is created when omitted.
        collector: Optional event collector.

    """

    def __init__(
        self,
        config: WilsonConfig,
        *,
        host: SourceHost | None = None,
        extractor: FrontmatterExtractor | None = None,
        collector: EngineCollector | None = None,
    ) -> None:
        self._config = config
        self._host = host if host is not None else FileSystemHost()
        self._extractor = (
            extractor
            if extractor is not None
            else FrontmatterExtractor(config.extensions, collector=collector)
        )
        self._collector = collector
        self._sources: dict[Path, Source] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """Counter incremented on every upsert and removal."""
        return self._generation

    @property
    def extractor(self) -> FrontmatterExtractor:
        return self._extractor

    @property
    def host(self) -> SourceHost:
        return self._host

    # ----- Path checks -----

    def absolute(self, path: Path | str) -> Path:
        """Return ``path`` as a normalized absolute path.

        Relative paths are site-root relative. ``..`` segments are collapsed
        so the content-root checks see where the path really points.
        """
        path = Path(path)
        if not path.is_absolute():
            path = self._config.root / path
        return Path(os.path.normpath(path))

    def is_page(self, path: Path | str) -> bool:
        """Whether ``path`` is a recognized page file under the content root."""
        path = self.absolute(path)
        return (
            path.is_relative_to(self._config.content_path)
            and path.suffix in self._config.extensions
        )

    def check_page(self, path: Path | str) -> Path:
        """Return the absolute page path, or raise if it is not a page.

        Raises:
            InvalidSource: If the path is outside the content root or has an
                unrecognized extension.

        """
        absolute = self.absolute(path)
        if not absolute.is_relative_to(self._config.content_path):
            msg = f"{absolute} is outside the content root {self._config.content_path}"
            raise InvalidSource(msg)
        if absolute.suffix not in self._config.extensions:
            msg = f"{absolute} does not have a recognized page extension"
            raise InvalidSource(msg)
        return absolute

    # ----- Building -----

    def scan(self) -> dict[Path, Source]:
        """Discover, read and extract every page under the content root.

        Replaces any previous contents. Read and parse errors propagate.

        """
        start = time.perf_counter()
        root = self._config.content_path
        self._sources = {}
        for page_path in self._host.list_files(root, self._config.extensions):
            absolute = root / page_path
            source = self._new_source(absolute)
            content = self._host.read_text(absolute)
            source.frontmatter = self._extractor.extract_file(absolute, content)
            source.digest = content_digest(content)
            self._sources[absolute] = source
        self._generation += 1

        if self._collector is not None:
            self._collector.record_scan(
                str(root),
                sources=len(self._sources),
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        return dict(self._sources)

    def read_frontmatter(self, path: Path | str, content: str | None = None) -> Frontmatter:
        """Extract frontmatter for a page, reading it from the host if needed."""
        absolute = self.check_page(path)
        if content is None:
            content = self._host.read_text(absolute)
        return self._extractor.extract_file(absolute, content)

    def upsert(
        self,
        path: Path | str,
        frontmatter: Frontmatter,
        *,
        digest: str | None = None,
    ) -> Source:
        """Replace a source's frontmatter, or register a new source.

        Raises:
            InvalidSource: If ``path`` is not a page.

        """
        absolute = self.check_page(path)
        source = self._sources.get(absolute)
        if source is None:
            source = self._new_source(absolute)
            self._sources[absolute] = source
        source.frontmatter = frontmatter
        if digest is not None:
            source.digest = digest
        self._generation += 1
        return source

    def remove(self, path: Path | str) -> Source | None:
        """Forget a source. Returns it, or None if it was unknown."""
        source = self._sources.pop(self.absolute(path), None)
        if source is not None:
            self._generation += 1
        return source

    def _new_source(self, absolute: Path) -> Source:
        return Source(
            absolute_path=absolute,
            relative_path=absolute.relative_to(self._config.root),
            page_path=absolute.relative_to(self._config.content_path),
            extension=absolute.suffix,
        )

    # ----- Access -----

    def get(self, path: Path | str) -> Source | None:
        return self._sources.get(self.absolute(path))

    def sources(self) -> list[Source]:
        return list(self._sources.values())

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self.absolute(path) in self._sources

    def __iter__(self) -> Iterator[Source]:
        return iter(list(self._sources.values()))

    def __len__(self) -> int:
        return len(self._sources)
