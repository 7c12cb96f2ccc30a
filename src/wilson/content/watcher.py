"""File watcher — turns filesystem changes under the content root into events.

Used by ``wilson dev``. Only page files (recognized extension, below the
content root) produce events; everything else is ignored.

The watcher runs watchfiles in the foreground and yields events one at a
time, so each change is fully applied before the next is read.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

if TYPE_CHECKING:
    from collections.abc import Iterator

    from wilson.config import WilsonConfig


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A page file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def is_page_change(path: Path, config: WilsonConfig) -> bool:
    """Whether a changed path is a page source of this site."""
    try:
        rel = path.relative_to(config.content_path)
    except ValueError:
        return False
    if any(part.startswith(".") for part in rel.parts):
        return False
    return path.suffix in config.extensions


def to_events(raw_changes: set[tuple[Change, str]], config: WilsonConfig) -> list[ChangeEvent]:
    """Convert one watchfiles batch into page events, sorted by path."""
    events: list[ChangeEvent] = []
    for change_type, path_str in raw_changes:
        path = Path(path_str)
        if not is_page_change(path, config):
            continue
        kind = _CHANGE_KIND_MAP.get(change_type, "modified")
        events.append(ChangeEvent(path=path, kind=kind))
    return sorted(events, key=lambda e: (str(e.path), e.kind))


class SourceWatcher:
    """Watches the content root and yields page change events.

    Args:
        config: Site configuration (content root and extensions).
        debounce: Milliseconds watchfiles waits to group changes.

    """

    def __init__(self, config: WilsonConfig, *, debounce: int = 300) -> None:
        self._config = config
        self._debounce = debounce
        self._stop_event = threading.Event()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Signal ``changes()`` to return after the current batch."""
        self._stop_event.set()

    def changes(self) -> Iterator[ChangeEvent]:
        """Block on the filesystem and yield page changes as they occur."""
        from watchfiles import watch

        self._stop_event.clear()
        for raw_changes in watch(
            self._config.content_path,
            stop_event=self._stop_event,
            debounce=self._debounce,
            step=100,
        ):
            yield from to_events(raw_changes, self._config)
