"""Host interface — the narrow read access the engine needs from its host.

The engine never walks the filesystem itself; it asks a ``SourceHost`` to
list page files and read them. ``FileSystemHost`` is the default, backed by
``pathlib``. Tests and embedding build tools supply their own.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable


class SourceHost(Protocol):
    """Read/list capability consumed by the source registry."""

    def read_text(self, path: Path) -> str: ...

    def list_files(self, root: Path, extensions: Iterable[str]) -> list[Path]: ...


class FileSystemHost:
    """Reads page sources from disk.

    ``list_files`` returns paths relative to ``root``, sorted so scans are
    reproducible. Hidden files and directories (dot-prefixed) are skipped.
    A missing root lists as empty.

    """

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def list_files(self, root: Path, extensions: Iterable[str]) -> list[Path]:
        root = Path(root)
        if not root.is_dir():
            return []
        wanted = frozenset(extensions)
        found: list[Path] = []
        for path in root.rglob("*"):
            rel = path.relative_to(root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.suffix in wanted and path.is_file():
                found.append(rel)
        return sorted(found, key=lambda p: p.as_posix())
