"""Source loading and per-file dependency extraction."""

from __future__ import annotations

from module_graph.extractor.dependency_extractor import DependencyExtractor, find_self_exports
from module_graph.extractor.loader import DEFAULT_PREPROCESSORS, compile_coffee, load_source

__all__ = [
    "DEFAULT_PREPROCESSORS",
    "DependencyExtractor",
    "compile_coffee",
    "find_self_exports",
    "load_source",
]
