"""module-graph: static dependency graphs for CommonJS source trees."""

from module_graph.analysis.graph_models import ModuleGraph
from module_graph.errors import (
    ModuleGraphError,
    PreprocessError,
    ReadError,
    ResolutionError,
    ScanError,
    UnresolvedModuleError,
)
from module_graph.models import AddModuleEvent, GraphConfig, ParseFileEvent
from module_graph.pipeline import build_graph

__version__ = "0.1.0"

__all__ = [
    "AddModuleEvent",
    "GraphConfig",
    "ModuleGraph",
    "ModuleGraphError",
    "ParseFileEvent",
    "PreprocessError",
    "ReadError",
    "ResolutionError",
    "ScanError",
    "UnresolvedModuleError",
    "build_graph",
]
