"""Engine observability — a unified event model for scans and updates.

Records events from:
- **Sources**: startup scan and frontmatter extraction (cache hits/misses)
- **Routing**: per-source route resolution
- **Updates**: incremental updates with their dependent fan-out

All events are frozen dataclasses with nanosecond timestamps.

Quick Start:
    >>> from wilson.observability import EngineCollector, EventLog
    >>> log = EventLog()
    >>> collector = EngineCollector(log)
    >>> # Pass collector to Engine(config, collector=collector)

"""

from wilson.observability.collector import EngineCollector
from wilson.observability.events import (
    EngineEvent,
    FrontmatterExtracted,
    SourceResolved,
    SourcesScanned,
    SourceUpdated,
    now_ns,
)
from wilson.observability.log import EventLog

__all__ = [
    "EngineCollector",
    "EngineEvent",
    "EventLog",
    "FrontmatterExtracted",
    "SourceResolved",
    "SourceUpdated",
    "SourcesScanned",
    "now_ns",
]
