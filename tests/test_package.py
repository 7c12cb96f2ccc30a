"""Tests for wilson package exports and metadata."""

import pytest

import wilson


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(wilson.__version__, str)
        assert "0.1.0" in wilson.__version__

    def test_all_exports_resolvable(self) -> None:
        for name in wilson.__all__:
            getattr(wilson, name)

    def test_lazy_exports_are_the_real_objects(self) -> None:
        from wilson.config import WilsonConfig
        from wilson.engine import Engine, resolve_all

        assert wilson.WilsonConfig is WilsonConfig
        assert wilson.Engine is Engine
        assert wilson.resolve_all is resolve_all

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            wilson.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
