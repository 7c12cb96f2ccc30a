"""Wilson configuration.

WilsonConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from wilson._errors import ConfigError

# Extensions wilson knows how to read frontmatter from, and how.
EXTENSION_KINDS: dict[str, str] = {
    ".md": "markdown",
    ".py": "python",
}


@dataclass(frozen=True, slots=True)
class WilsonConfig:
    """Configuration for a wilson site.

    Attributes:
        root: Path to the site root directory. Always resolved to an
              absolute path on construction.
        pages_dir: Content root, relative to ``root``. Every recognized file
            below it is a page source.
        extensions: Recognized page extensions. Each must be a key of
            ``EXTENSION_KINDS``.
        page_size: Number of content pages per pagination chunk.
        output: Output directory for ``wilson build``.

    """

    root: Path = field(default_factory=Path.cwd)
    pages_dir: str = "src/pages"
    extensions: tuple[str, ...] = (".md", ".py")
    page_size: int = 2
    output: Path = field(default_factory=lambda: Path("dist"))

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

        if not isinstance(self.extensions, tuple):
            object.__setattr__(self, "extensions", tuple(self.extensions))

        unknown = [ext for ext in self.extensions if ext not in EXTENSION_KINDS]
        if unknown:
            msg = f"Unrecognized page extension(s): {', '.join(unknown)}"
            raise ConfigError(msg)

        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            msg = f"page_size must be an integer, got {self.page_size!r}"
            raise ConfigError(msg)
        if self.page_size < 1:
            msg = f"page_size must be positive, got {self.page_size}"
            raise ConfigError(msg)

    @property
    def content_path(self) -> Path:
        """Absolute path to the content root."""
        return self.root / self.pages_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
