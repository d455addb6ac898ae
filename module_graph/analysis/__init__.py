"""Graph construction and queries."""

from __future__ import annotations

from module_graph.analysis.dependency_graph import (
    DependencyGraphBuilder,
    detect_cycles,
    find_dependents,
    find_leaves,
    find_orphans,
    sort_graph,
)
from module_graph.analysis.graph_models import ModuleGraph

__all__ = [
    "DependencyGraphBuilder",
    "ModuleGraph",
    "detect_cycles",
    "find_dependents",
    "find_leaves",
    "find_orphans",
    "sort_graph",
]
