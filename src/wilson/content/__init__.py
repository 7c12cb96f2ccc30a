"""Content layer — page sources and their frontmatter.

Handles source discovery, frontmatter extraction (YAML blocks and static
Python literals), and file watching for the incremental updater.
"""

from wilson.content.frontmatter import FrontmatterCache, FrontmatterExtractor, extract
from wilson.content.host import FileSystemHost, SourceHost
from wilson.content.sources import Source, SourceRegistry

__all__ = [
    "FileSystemHost",
    "FrontmatterCache",
    "FrontmatterExtractor",
    "Source",
    "SourceHost",
    "SourceRegistry",
    "extract",
]
