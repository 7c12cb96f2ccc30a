"""Route export — write the route manifest and per-route props to disk.

Output layout:
    ``routes.json``                 manifest: route, sourcePath, query per entry
    ``<route>/props.json``          props for that route (``/`` -> ``props.json``)

For Markdown sources the props file also carries ``html``, the page body
rendered to HTML. Python pages are left to the host's renderer.
"""

from __future__ import annotations

import json
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from wilson._errors import ExportError
from wilson.content.body import markdown_body, render_markdown

if TYPE_CHECKING:
    from wilson.config import WilsonConfig
    from wilson.content.sources import SourceRegistry
    from wilson.routing.table import RouteTable

MANIFEST_NAME = "routes.json"
PROPS_NAME = "props.json"


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        route: Route the file belongs to (``""`` for the manifest).
        output_path: Absolute filesystem path to the written file.
        file_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.

    """

    route: str
    output_path: Path
    file_type: Literal["manifest", "props"]
    size_bytes: int


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full export.

    Attributes:
        files: All files written during export.
        total_routes: Number of routes exported.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_routes: int
    duration_ms: float
    output_dir: Path


def route_to_filepath(route: str, output_dir: Path) -> Path:
    """Convert a route to its props file path.

    ``/`` -> ``output/props.json``, ``/blog/page-2/`` -> ``output/blog/page-2/props.json``.
    """
    clean = route.strip("/")
    if not clean:
        return output_dir / PROPS_NAME
    return output_dir / clean / PROPS_NAME


def export_site(
    table: RouteTable,
    registry: SourceRegistry,
    config: WilsonConfig,
    output_dir: Path | None = None,
) -> ExportResult:
    """Write the route manifest and every route's props.

    The output directory is removed and recreated first.

    Raises:
        ExportError: If the output directory overlaps the content root, two
            routes collide on one path, or writing fails.

    """
    start = time.perf_counter()
    output_dir = Path(output_dir) if output_dir is not None else config.output_path
    _check_output_dir(output_dir, config)
    _clean_output(output_dir)

    files: list[ExportedFile] = []
    written: dict[Path, str] = {}
    html_cache: dict[Path, str] = {}

    entries = sorted(table.entries(), key=lambda e: (e.route, str(e.source_path)))
    manifest = [entry.as_dict() for entry in entries]
    manifest_path = output_dir / MANIFEST_NAME
    files.append(
        ExportedFile(
            route="",
            output_path=manifest_path,
            file_type="manifest",
            size_bytes=_write_json(manifest_path, manifest),
        )
    )

    for route in table:
        filepath = route_to_filepath(route.route, output_dir)
        if filepath in written:
            msg = (
                f"Route {route.route!r} from {route.source_path} collides with "
                f"a route from {written[filepath]}"
            )
            raise ExportError(msg)
        written[filepath] = str(route.source_path)

        payload: dict[str, Any] = route.props.to_dict()
        if route.source_path.suffix == ".md":
            if route.source_path not in html_cache:
                html_cache[route.source_path] = _render_source(registry, route.source_path)
            payload["html"] = html_cache[route.source_path]

        files.append(
            ExportedFile(
                route=route.route,
                output_path=filepath,
                file_type="props",
                size_bytes=_write_json(filepath, payload),
            )
        )

    return ExportResult(
        files=tuple(files),
        total_routes=len(table),
        duration_ms=(time.perf_counter() - start) * 1000,
        output_dir=output_dir,
    )


def _check_output_dir(output_dir: Path, config: WilsonConfig) -> None:
    resolved = output_dir.resolve()
    content = config.content_path.resolve()
    if content.is_relative_to(resolved) or resolved.is_relative_to(content):
        msg = f"Output directory {output_dir} overlaps the site sources"
        raise ExportError(msg)


def _clean_output(output_dir: Path) -> None:
    """Remove and recreate the output directory."""
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)


def _render_source(registry: SourceRegistry, source_path: Path) -> str:
    try:
        source = registry.host.read_text(source_path)
    except OSError as exc:
        msg = f"Failed to read {source_path}: {exc}"
        raise ExportError(msg) from exc
    return render_markdown(markdown_body(source))


def _write_json(filepath: Path, data: Any) -> int:
    """Write JSON to a file, creating parent dirs as needed. Returns bytes written."""
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(data, indent=2, ensure_ascii=False, default=str).encode("utf-8")
        filepath.write_bytes(payload)
    except OSError as exc:
        msg = f"Failed to write {filepath}: {exc}"
        raise ExportError(msg) from exc
    return len(payload)
