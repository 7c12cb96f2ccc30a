"""Wilson error hierarchy.

All wilson-specific errors inherit from WilsonError for easy catching.
"""


class WilsonError(Exception):
    """Base error for all wilson operations."""


class ConfigError(WilsonError):
    """Invalid or missing configuration."""


class ContentError(WilsonError):
    """Error in content processing (frontmatter, sources, routing)."""


class InvalidSource(ContentError):
    """A path is not a page: outside the content root or unrecognized extension."""


class ParseFailure(ContentError):
    """Frontmatter could not be parsed from a source."""


class RouteNotFound(WilsonError, KeyError):
    """No route exists for the requested source path and query."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class ExportError(WilsonError):
    """Error while writing build output."""
