"""Wilson engine — the content-to-route resolution entry points.

Engine wires the registry, taxonomy index, resolver, route table and
incremental updater for one site. The module-level ``resolve_all``,
``build`` and ``dev`` functions are the primary entry points.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from wilson._errors import WilsonError
from wilson.config_loader import load_config
from wilson.content.frontmatter import FrontmatterCache, FrontmatterExtractor
from wilson.content.sources import SourceRegistry
from wilson.reactive.graph import DependencyGraph
from wilson.reactive.updater import IncrementalUpdater
from wilson.routing.resolver import PageResolver
from wilson.routing.table import RouteTable
from wilson.routing.taxonomy import TaxonomyIndex

if TYPE_CHECKING:
    from wilson._types import DependentHandle, QueryString
    from wilson.config import WilsonConfig
    from wilson.content.host import SourceHost
    from wilson.export.manifest import ExportResult
    from wilson.observability.collector import EngineCollector
    from wilson.observability.events import SourceUpdated
    from wilson.routing.models import PageProps, Query, RouteEntry


@dataclass(frozen=True, slots=True)
class SourceChange:
    """A change notification from the host.

    Attributes:
        path: Path of the changed file.
        read: Returns the file's current raw content. Not called for
            deletions or for paths that are not pages.
        dependents: Handles the host already plans to reload.
        kind: Type of change.

    """

    path: Path
    read: Callable[[], str]
    dependents: tuple[DependentHandle, ...] = ()
    kind: Literal["created", "modified", "deleted"] = "modified"


class Engine:
    """Resolves a site's sources into routes and keeps them current.

    Args:
        config: Site configuration, fixed for the engine's lifetime.
        host: File access; defaults to the filesystem.
        collector: Optional event collector.
        handle_for: Maps a dependent source path to the host's reload handle.

    """

    def __init__(
        self,
        config: WilsonConfig,
        *,
        host: SourceHost | None = None,
        collector: EngineCollector | None = None,
        handle_for: Callable[[Path], DependentHandle] | None = None,
    ) -> None:
        self._config = config
        self._host = host
        self._collector = collector
        self._handle_for = handle_for
        self._registry: SourceRegistry | None = None
        self._table: RouteTable | None = None
        self._updater: IncrementalUpdater | None = None

    @property
    def config(self) -> WilsonConfig:
        return self._config

    @property
    def registry(self) -> SourceRegistry:
        self._require_resolved()
        assert self._registry is not None
        return self._registry

    @property
    def table(self) -> RouteTable:
        self._require_resolved()
        assert self._table is not None
        return self._table

    def resolve_all(self) -> RouteTable:
        """Scan the content root and resolve every source.

        Starts from fresh caches, so calling it again rebuilds the table
        from the current state of the files.
        """
        extractor = FrontmatterExtractor(
            self._config.extensions,
            cache=FrontmatterCache(),
            collector=self._collector,
        )
        registry = SourceRegistry(
            self._config,
            host=self._host,
            extractor=extractor,
            collector=self._collector,
        )
        registry.scan()

        index = TaxonomyIndex(registry, self._config.extensions)
        resolver = PageResolver(self._config, index, collector=self._collector)
        table = RouteTable()
        for source in registry:
            table.add_all(resolver.resolve(source))

        self._registry = registry
        self._table = table
        self._updater = IncrementalUpdater(
            registry,
            index,
            resolver,
            table,
            graph=DependencyGraph(registry),
            handle_for=self._handle_for,
            collector=self._collector,
        )
        return table

    def on_source_changed(self, notification: SourceChange) -> tuple[DependentHandle, ...]:
        """Apply one host change notification.

        Returns the notification's dependent handles extended with the
        sources that had to be regenerated because of it.
        """
        self._require_resolved()
        assert self._updater is not None
        assert self._registry is not None

        if notification.kind == "deleted":
            return self._updater.on_delete(notification.path, notification.dependents)
        if not self._registry.is_page(notification.path):
            return notification.dependents
        return self._updater.on_change(
            notification.path,
            notification.read(),
            notification.dependents,
        )

    def get_route_props(
        self,
        source_path: Path | str,
        query: Query | QueryString | dict[str, Any] | None = None,
    ) -> PageProps:
        """Props of one route, for the rendering stage.

        Raises:
            RouteNotFound: If the route does not exist.

        """
        return self.table.props(self.registry.absolute(source_path), query)

    def list_routes(self) -> list[RouteEntry]:
        """Route manifest entries, for the site's client-side router."""
        return self.table.entries()

    def _require_resolved(self) -> None:
        if self._table is None:
            msg = "Engine used before resolve_all()"
            raise WilsonError(msg)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def resolve_all(
    root: str | Path = ".",
    *,
    host: SourceHost | None = None,
    collector: EngineCollector | None = None,
    **overrides: Any,
) -> RouteTable:
    """Load the site config under ``root`` and return its full route table."""
    config = load_config(Path(root), **overrides)
    return Engine(config, host=host, collector=collector).resolve_all()


def build(root: str | Path = ".", *, output: str | Path | None = None, **overrides: Any) -> ExportResult:
    """Resolve every route and export the manifest and props.

    Args:
        root: Site root directory.
        output: Output directory (overrides config).

    """
    from wilson.export.manifest import export_site

    config = load_config(Path(root), output=Path(output) if output else None, **overrides)
    engine = Engine(config)
    table = engine.resolve_all()
    result = export_site(table, engine.registry, config)
    print(
        f"  Exported {result.total_routes} routes to {result.output_dir} "
        f"in {result.duration_ms:.0f}ms",
        file=sys.stderr,
    )
    return result


def dev(root: str | Path = ".", **overrides: Any) -> None:
    """Resolve the site, then keep the routes current as page files change.

    Runs until interrupted. Each change is applied before the next one is
    read; a failing update is reported and the loop continues.
    """
    from wilson.content.watcher import SourceWatcher
    from wilson.observability.collector import EngineCollector
    from wilson.observability.events import SourceUpdated

    config = load_config(Path(root), **overrides)
    collector = EngineCollector()
    engine = Engine(config, collector=collector)
    table = engine.resolve_all()
    print(
        f"  Resolved {len(table)} routes from {len(engine.registry)} sources",
        file=sys.stderr,
    )

    watcher = SourceWatcher(config)
    try:
        for event in watcher.changes():
            notification = SourceChange(
                path=event.path,
                read=lambda p=event.path: engine.registry.host.read_text(p),
                kind=event.kind,
            )
            previous = collector.log.last(SourceUpdated)
            try:
                engine.on_source_changed(notification)
            except (WilsonError, OSError) as exc:
                print(f"  Update error ({event.path.name}): {exc}", file=sys.stderr)
                continue
            update = collector.log.last(SourceUpdated)
            if update is not None and update is not previous:
                _log_change(update)
    except KeyboardInterrupt:
        watcher.stop()


def _log_change(update: SourceUpdated) -> None:
    """Log an applied change to stderr."""
    count = len(update.dependents)
    noun = "dependent" if count == 1 else "dependents"
    print(
        f"  {Path(update.path).name} {update.kind}: {count} {noun}, "
        f"{update.routes_regenerated} routes regenerated in {update.duration_ms:.0f}ms",
        file=sys.stderr,
    )
