"""Reactive layer — change propagation.

Connects a source edit to every route it affects through the taxonomy
dependency graph.
"""

from wilson.reactive.graph import DependencyGraph, merge_taxonomy_values
from wilson.reactive.updater import IncrementalUpdater

__all__ = [
    "DependencyGraph",
    "IncrementalUpdater",
    "merge_taxonomy_values",
]
