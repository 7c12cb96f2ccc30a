"""Shared type definitions for wilson."""

from collections.abc import Hashable
from typing import Any, Literal

# How frontmatter is embedded in a source file
type FileKind = Literal["markdown", "python"]

# Value of the ``type`` frontmatter field
type PageType = Literal["content", "select", "taxonomy", "terms"]

# Normalized route URL path (e.g., "/blog/page-2/")
type RoutePath = str

# Frontmatter mapping as extracted from a source
type Frontmatter = dict[str, Any]

# Serialized query string (e.g., "selectedTerm=x&page=2")
type QueryString = str

# Opaque host handle for a dependent source (module node, path, ...)
type DependentHandle = Hashable
