"""Incremental updater — keeps the route table consistent with edited sources.

Orchestrates the change propagation flow for one notification:
    1. Ignore paths that are not pages, and content identical to what was
       last seen for the path.
    2. Re-extract the source's frontmatter.
    3. If the source is (or was) a content page, find the listing pages that
       depend on its taxonomy terms before *or* after the edit.
    4. Upsert the edited source, then drop and re-resolve the routes of the
       edited source and of every dependent.
    5. Hand back the host's dependent handles, extended with the dependents,
       so the host can reload the right generated modules.

Every regeneration is a full per-source rebuild; routes are never patched
field by field. There is no rollback: if resolution fails part-way, the
sources and routes already updated stay updated.
"""

from __future__ import annotations

import dataclasses
import time
from typing import TYPE_CHECKING

from wilson.content.frontmatter import content_digest
from wilson.reactive.graph import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from wilson._types import DependentHandle
    from wilson.content.sources import Source, SourceRegistry
    from wilson.observability.collector import EngineCollector
    from wilson.routing.resolver import PageResolver
    from wilson.routing.table import RouteTable
    from wilson.routing.taxonomy import TaxonomyIndex


def _default_handle(path: Path) -> DependentHandle:
    return path


class IncrementalUpdater:
    """Applies source changes to the registry and route table.

    Args:
        registry: Source registry to mutate.
        index: Taxonomy index the resolver reads; cleared before each
            regeneration pass.
        resolver: Page resolver producing fresh routes.
        table: Route table to refresh.
        graph: Dependency graph; built over ``registry`` when omitted.
        handle_for: Maps a dependent's absolute path to the host's handle
            for it (e.g. a module graph node). Defaults to the path itself.
        collector: Optional event collector.

    """

    def __init__(
        self,
        registry: SourceRegistry,
        index: TaxonomyIndex,
        resolver: PageResolver,
        table: RouteTable,
        *,
        graph: DependencyGraph | None = None,
        handle_for: Callable[[Path], DependentHandle] | None = None,
        collector: EngineCollector | None = None,
    ) -> None:
        self._registry = registry
        self._index = index
        self._resolver = resolver
        self._table = table
        self._graph = graph if graph is not None else DependencyGraph(registry)
        self._handle_for = handle_for if handle_for is not None else _default_handle
        self._collector = collector

    def on_change(
        self,
        path: Path | str,
        new_content: str,
        prior_dependents: Iterable[DependentHandle] = (),
    ) -> tuple[DependentHandle, ...]:
        """Absorb a created or modified source.

        Args:
            path: Path of the changed file.
            new_content: Its raw content after the change.
            prior_dependents: Handles the host already plans to reload.

        Returns:
            ``prior_dependents`` extended with one handle per dependent
            source that was regenerated.

        Raises:
            ParseFailure: If the new frontmatter is malformed. Nothing has
                been mutated at that point.

        """
        prior = tuple(prior_dependents)
        if not self._registry.is_page(path):
            return prior

        start = time.perf_counter()
        absolute = self._registry.absolute(path)
        current = self._registry.get(absolute)
        digest = content_digest(new_content)
        if current is not None and current.digest == digest:
            return prior

        frontmatter = self._registry.read_frontmatter(absolute, new_content)
        before = dataclasses.replace(current) if current is not None else None
        source = self._registry.upsert(absolute, frontmatter, digest=digest)

        dependents = self._graph.affected_by_edit(absolute, before, source)
        routes = self._regenerate([source, *dependents])

        self._record(
            absolute,
            "created" if current is None else "modified",
            dependents,
            routes,
            start,
        )
        return self._extend(prior, dependents)

    def on_delete(
        self,
        path: Path | str,
        prior_dependents: Iterable[DependentHandle] = (),
    ) -> tuple[DependentHandle, ...]:
        """Absorb a deleted source.

        The source and its routes are removed, and listing pages that
        showed it (or its terms) are regenerated.
        """
        prior = tuple(prior_dependents)
        if not self._registry.is_page(path):
            return prior

        start = time.perf_counter()
        absolute = self._registry.absolute(path)
        removed = self._registry.remove(absolute)
        if removed is None:
            return prior

        self._table.remove_source(absolute)
        dependents = self._graph.affected_by_edit(absolute, removed, None)
        routes = self._regenerate(dependents)

        self._record(absolute, "deleted", dependents, routes, start)
        return self._extend(prior, dependents)

    def _regenerate(self, sources: Iterable[Source]) -> int:
        """Drop and re-resolve the routes of each source. Returns routes inserted."""
        self._index.clear()
        count = 0
        for source in sources:
            self._table.remove_source(source.absolute_path)
            count += self._table.add_all(self._resolver.resolve(source))
        return count

    def _extend(
        self,
        prior: tuple[DependentHandle, ...],
        dependents: list[Source],
    ) -> tuple[DependentHandle, ...]:
        handles = list(prior)
        for source in dependents:
            handle = self._handle_for(source.absolute_path)
            if handle not in handles:
                handles.append(handle)
        return tuple(handles)

    def _record(
        self,
        path: Path,
        kind: str,
        dependents: list[Source],
        routes: int,
        start: float,
    ) -> None:
        if self._collector is None:
            return
        self._collector.record_update(
            str(path),
            kind=kind,  # type: ignore[arg-type]
            dependents=[str(s.absolute_path) for s in dependents],
            routes_regenerated=routes,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
