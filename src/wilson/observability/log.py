"""Event log — the bounded store behind ``EngineCollector``.

Keeps the most recent engine events, oldest first. The dev loop reads the
latest ``SourceUpdated`` off it to report each applied change; tests read
events back by type.

The watcher thread appends while the dev loop reads, so every access
takes the lock.

"""

import threading
from collections import deque

from wilson.observability.events import EngineEvent


class EventLog:
    """Ring buffer of engine events.

    Args:
        max_events: Capacity; the oldest events are dropped beyond it.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 5_000) -> None:
        self._events: deque[EngineEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: EngineEvent) -> None:
        with self._lock:
            self._events.append(event)

    def events(self, event_type: type | None = None) -> list[EngineEvent]:
        """Stored events, oldest first, optionally only those of ``event_type``."""
        with self._lock:
            items = list(self._events)
        if event_type is None:
            return items
        return [event for event in items if isinstance(event, event_type)]

    def last(self, event_type: type) -> EngineEvent | None:
        """The most recent event of ``event_type``, or None."""
        with self._lock:
            for event in reversed(self._events):
                if isinstance(event, event_type):
                    return event
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
