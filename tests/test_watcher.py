"""Tests for wilson.content.watcher — page change detection."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from watchfiles import Change

from wilson.config import WilsonConfig
from wilson.content.watcher import ChangeEvent, SourceWatcher, is_page_change, to_events


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> WilsonConfig:
    """A WilsonConfig rooted at a temp directory."""
    return WilsonConfig(root=tmp_path)


# ---------------------------------------------------------------------------
# ChangeEvent dataclass tests
# ---------------------------------------------------------------------------


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/tmp/test.md"), kind="modified")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert ChangeEvent(Path("/a.md"), "modified") == ChangeEvent(Path("/a.md"), "modified")

    def test_hashable(self) -> None:
        assert isinstance(hash(ChangeEvent(Path("/a.md"), "created")), int)


# ---------------------------------------------------------------------------
# is_page_change tests
# ---------------------------------------------------------------------------


class TestIsPageChange:
    """Unit tests for is_page_change()."""

    def test_markdown_page(self, config: WilsonConfig) -> None:
        assert is_page_change(config.content_path / "posts" / "a.md", config)

    def test_python_page(self, config: WilsonConfig) -> None:
        assert is_page_change(config.content_path / "blog" / "index.py", config)

    def test_other_extension(self, config: WilsonConfig) -> None:
        assert not is_page_change(config.content_path / "style.css", config)

    def test_outside_content_root(self, config: WilsonConfig) -> None:
        assert not is_page_change(config.root / "src" / "components" / "Card.py", config)

    def test_hidden(self, config: WilsonConfig) -> None:
        assert not is_page_change(config.content_path / ".a.md.swp", config)
        assert not is_page_change(config.content_path / ".git" / "a.md", config)

    def test_respects_configured_extensions(self, tmp_path: Path) -> None:
        config = WilsonConfig(root=tmp_path, extensions=(".md",))
        assert not is_page_change(config.content_path / "page.py", config)


# ---------------------------------------------------------------------------
# to_events tests
# ---------------------------------------------------------------------------


class TestToEvents:
    """Unit tests for to_events()."""

    def test_maps_change_kinds(self, config: WilsonConfig) -> None:
        root = config.content_path
        events = to_events(
            {
                (Change.added, str(root / "a.md")),
                (Change.modified, str(root / "b.py")),
                (Change.deleted, str(root / "c.md")),
            },
            config,
        )
        assert events == [
            ChangeEvent(root / "a.md", "created"),
            ChangeEvent(root / "b.py", "modified"),
            ChangeEvent(root / "c.md", "deleted"),
        ]

    def test_filters_non_pages(self, config: WilsonConfig) -> None:
        events = to_events(
            {
                (Change.modified, str(config.root / "wilson.yaml")),
                (Change.modified, str(config.content_path / "logo.svg")),
            },
            config,
        )
        assert events == []


# ---------------------------------------------------------------------------
# SourceWatcher tests
# ---------------------------------------------------------------------------


class TestSourceWatcher:
    """SourceWatcher — drives watchfiles and yields page events."""

    def test_yields_page_events(self, config: WilsonConfig) -> None:
        batches = [
            {(Change.modified, str(config.content_path / "a.md"))},
            {(Change.added, str(config.root / "README.md"))},
            {(Change.deleted, str(config.content_path / "b.py"))},
        ]
        watcher = SourceWatcher(config, debounce=50)
        with patch("watchfiles.watch", return_value=iter(batches)) as watch:
            events = list(watcher.changes())

        assert events == [
            ChangeEvent(config.content_path / "a.md", "modified"),
            ChangeEvent(config.content_path / "b.py", "deleted"),
        ]
        args, kwargs = watch.call_args
        assert args == (config.content_path,)
        assert kwargs["debounce"] == 50

    def test_stop(self, config: WilsonConfig) -> None:
        watcher = SourceWatcher(config)
        assert not watcher.stopped
        watcher.stop()
        assert watcher.stopped
