"""Routing layer — from sources to routes.

Taxonomy queries, per-source resolution with pagination, and the route
table that holds the result.
"""

from wilson.routing.models import (
    ContentSummary,
    PageProps,
    Pagination,
    Query,
    Route,
    RouteEntry,
    TermLink,
)
from wilson.routing.resolver import PageResolver
from wilson.routing.table import RouteTable
from wilson.routing.taxonomy import TaxonomyIndex

__all__ = [
    "ContentSummary",
    "PageProps",
    "PageResolver",
    "Pagination",
    "Query",
    "Route",
    "RouteEntry",
    "RouteTable",
    "TaxonomyIndex",
    "TermLink",
]
