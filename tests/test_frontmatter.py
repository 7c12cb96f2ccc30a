"""Tests for wilson.content.frontmatter — extraction and the content-hash cache."""

from pathlib import Path

import pytest

from wilson._errors import InvalidSource, ParseFailure
from wilson.content.frontmatter import (
    FrontmatterCache,
    FrontmatterExtractor,
    content_digest,
    extract,
    kind_for,
    parse_markdown_frontmatter,
    parse_python_frontmatter,
)
from wilson.observability.collector import EngineCollector
from wilson.observability.events import FrontmatterExtracted

MARKDOWN = "---\ntitle: Hello\ntaxonomies:\n  tags: [a, b]\n---\n\n# Body\n"
PYTHON = "frontmatter = {'title': 'Page 1', 'type': 'select'}\n"


class TestKindFor:
    """kind_for — extension to file kind."""

    def test_markdown(self) -> None:
        assert kind_for(Path("a/b.md"), (".md", ".py")) == "markdown"

    def test_python(self) -> None:
        assert kind_for(Path("a/b.py"), (".md", ".py")) == "python"

    def test_unrecognized(self) -> None:
        with pytest.raises(InvalidSource):
            kind_for(Path("a/b.txt"), (".md", ".py"))

    def test_not_enabled(self) -> None:
        with pytest.raises(InvalidSource):
            kind_for(Path("a/b.py"), (".md",))


class TestContentDigest:
    def test_stable(self) -> None:
        assert content_digest("abc") == content_digest("abc")

    def test_differs(self) -> None:
        assert content_digest("abc") != content_digest("abd")


class TestMarkdownFrontmatter:
    """parse_markdown_frontmatter — YAML blocks via python-frontmatter."""

    def test_parses_block(self) -> None:
        assert parse_markdown_frontmatter(MARKDOWN) == {
            "title": "Hello",
            "taxonomies": {"tags": ["a", "b"]},
        }

    def test_no_block_is_empty(self) -> None:
        assert parse_markdown_frontmatter("# Just a heading\n") == {}

    def test_empty_block_is_empty(self) -> None:
        assert parse_markdown_frontmatter("---\n---\n\nbody\n") == {}

    def test_malformed_yaml(self) -> None:
        with pytest.raises(ParseFailure) as exc_info:
            parse_markdown_frontmatter("---\ntitle: [unclosed\n---\n\nbody\n")
        assert exc_info.value.__cause__ is not None


class TestPythonFrontmatter:
    """parse_python_frontmatter — the static dict literal."""

    def test_parses_literal(self) -> None:
        assert parse_python_frontmatter(PYTHON) == {"title": "Page 1", "type": "select"}

    def test_no_binding_is_empty(self) -> None:
        assert parse_python_frontmatter("def Page(props):\n    return None\n") == {}

    def test_non_dict_binding_is_empty(self) -> None:
        assert parse_python_frontmatter("frontmatter = build()\n") == {}

    def test_syntax_error(self) -> None:
        with pytest.raises(ParseFailure, match="Invalid Python") as exc_info:
            parse_python_frontmatter("frontmatter = {'title': \n")
        assert isinstance(exc_info.value.__cause__, SyntaxError)

    def test_non_literal_value(self) -> None:
        with pytest.raises(ParseFailure, match="not a plain literal"):
            parse_python_frontmatter("frontmatter = {'title': get_title()}\n")


class TestExtract:
    """extract — dispatch by kind, with the optional cache."""

    def test_without_cache(self) -> None:
        assert extract(PYTHON, "python")["title"] == "Page 1"

    def test_cache_miss_then_hit(self) -> None:
        cache = FrontmatterCache()
        first = extract(MARKDOWN, "markdown", cache=cache)
        second = extract(MARKDOWN, "markdown", cache=cache)
        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1
        assert len(cache) == 1

    def test_cache_keyed_by_kind(self) -> None:
        cache = FrontmatterCache()
        content = "frontmatter = {'a': 1}\n"
        extract(content, "python", cache=cache)
        extract(content, "markdown", cache=cache)
        assert len(cache) == 2

    def test_failures_not_cached(self) -> None:
        cache = FrontmatterCache()
        for _ in range(2):
            with pytest.raises(ParseFailure):
                extract("frontmatter = {'a': f()}\n", "python", cache=cache)
        assert len(cache) == 0

    def test_clear(self) -> None:
        cache = FrontmatterCache()
        extract(PYTHON, "python", cache=cache)
        extract(PYTHON, "python", cache=cache)
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0


class TestFrontmatterExtractor:
    """FrontmatterExtractor — per-file extraction with path context."""

    def test_identical_files_share_one_parse(self) -> None:
        extractor = FrontmatterExtractor((".md", ".py"))
        extractor.extract_file(Path("/site/a.md"), MARKDOWN)
        extractor.extract_file(Path("/site/b.md"), MARKDOWN)
        assert extractor.cache.misses == 1
        assert extractor.cache.hits == 1

    def test_error_names_the_path(self) -> None:
        extractor = FrontmatterExtractor((".md", ".py"))
        with pytest.raises(ParseFailure, match="broken.py"):
            extractor.extract_file(Path("/site/broken.py"), "frontmatter = {\n")

    def test_unrecognized_extension(self) -> None:
        extractor = FrontmatterExtractor((".md", ".py"))
        with pytest.raises(InvalidSource):
            extractor.extract_file(Path("/site/notes.txt"), "hello")

    def test_records_events(self) -> None:
        collector = EngineCollector()
        extractor = FrontmatterExtractor((".md", ".py"), collector=collector)
        extractor.extract_file(Path("/site/a.md"), MARKDOWN)
        extractor.extract_file(Path("/site/b.md"), MARKDOWN)

        events = collector.log.events(FrontmatterExtracted)
        assert [e.cache_hit for e in events] == [False, True]
        assert all(e.kind == "markdown" for e in events)
        assert events[-1].path == "/site/b.md"
