"""Engine collector — records engine activity into an event log.

Components receive an optional collector and call its ``record_*``
methods; nothing is recorded when no collector is wired in.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from wilson.observability.events import (
    FrontmatterExtracted,
    SourceResolved,
    SourcesScanned,
    SourceUpdated,
    now_ns,
)
from wilson.observability.log import EventLog

if TYPE_CHECKING:
    from collections.abc import Iterable


class EngineCollector:
    """Event collector shared by the registry, resolver and updater.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Source events -----

    def record_scan(self, root: str, *, sources: int, duration_ms: float = 0.0) -> None:
        """Record the startup scan of the content root."""
        self._log.append(
            SourcesScanned(
                root=root,
                sources=sources,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_extract(self, path: str, *, kind: str, cache_hit: bool) -> None:
        """Record a frontmatter extraction (or cache hit)."""
        self._log.append(
            FrontmatterExtracted(
                path=path,
                kind=kind,
                cache_hit=cache_hit,
                timestamp_ns=now_ns(),
            )
        )

    # ----- Routing events -----

    def record_resolve(self, path: str, *, page_type: str, routes: int) -> None:
        """Record the resolution of one source into routes."""
        self._log.append(
            SourceResolved(
                path=path,
                page_type=page_type,
                routes=routes,
                timestamp_ns=now_ns(),
            )
        )

    def record_update(
        self,
        path: str,
        *,
        kind: Literal["created", "modified", "deleted"] = "modified",
        dependents: Iterable[str] = (),
        routes_regenerated: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a finished incremental update."""
        self._log.append(
            SourceUpdated(
                path=path,
                kind=kind,
                dependents=tuple(dependents),
                routes_regenerated=routes_regenerated,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
