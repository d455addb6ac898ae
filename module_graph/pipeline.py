"""Run orchestrator: roots -> base directory -> build -> sort."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from module_graph.analysis.dependency_graph import DependencyGraphBuilder, sort_graph
from module_graph.analysis.graph_models import ModuleGraph
from module_graph.models import GraphConfig, ProgressCallback
from module_graph.paths import absolute, compute_base_directory

logger = logging.getLogger(__name__)


def build_graph(
    roots: Sequence[str | os.PathLike],
    config: GraphConfig | None = None,
    progress: ProgressCallback | None = None,
) -> ModuleGraph:
    """Build the sorted dependency graph of every source file under roots."""
    config = config or GraphConfig()
    targets = [absolute(root) for root in roots]

    base_dir = compute_base_directory(targets)
    logger.info("Building module graph for %d root(s) relative to %s", len(targets), base_dir)

    builder = DependencyGraphBuilder(config, base_dir, progress=progress)
    tree = sort_graph(builder.build(targets))

    logger.info("Found %d module(s)", len(tree))
    return ModuleGraph(tree=tree, base_dir=base_dir, extensions=config.id_extensions)
