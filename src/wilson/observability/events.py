"""Event model for engine observability.

Defines event types for the source scan, frontmatter extraction, route
resolution and incremental updates.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

"""

import time
from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Source events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourcesScanned:
    """The content root was scanned at startup.

    Attributes:
        root: Absolute path of the content root.
        sources: Number of page sources discovered.
        duration_ms: Time spent listing, reading and extracting.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    root: str
    sources: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class FrontmatterExtracted:
    """Frontmatter was requested for a source file.

    Attributes:
        path: Absolute path to the source file.
        kind: File kind (``markdown`` or ``python``).
        cache_hit: True if the mapping came from the content-hash cache.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: str
    cache_hit: bool
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Routing events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SourceResolved:
    """A source was resolved into routes.

    Attributes:
        path: Absolute path to the source file.
        page_type: The source's frontmatter ``type``.
        routes: Number of routes produced.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    page_type: str
    routes: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class SourceUpdated:
    """An incremental update finished for a changed source.

    Attributes:
        path: The source file that changed.
        kind: Whether the file was created, modified or deleted.
        dependents: Absolute paths of unedited sources that were regenerated.
        routes_regenerated: Routes inserted for the source and its dependents.
        duration_ms: Time from notification to route table refresh.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: Literal["created", "modified", "deleted"]
    dependents: tuple[str, ...]
    routes_regenerated: int
    duration_ms: float
    timestamp_ns: int


type EngineEvent = SourcesScanned | FrontmatterExtracted | SourceResolved | SourceUpdated


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
