"""Result model for a finished graph run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from module_graph.analysis.dependency_graph import (
    detect_cycles,
    find_dependents,
    find_leaves,
    find_orphans,
)
from module_graph.models import DependencyTree
from module_graph.paths import to_path
from module_graph.resolver import default_is_file


@dataclass
class ModuleGraph:
    """A sorted dependency tree together with the directory its ids are relative to."""
    tree: DependencyTree
    base_dir: Path
    extensions: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> DependencyTree:
        return {module_id: list(deps) for module_id, deps in self.tree.items()}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.tree, indent=indent)

    def depends(self, module_id: str) -> list[str]:
        return find_dependents(self.tree, module_id)

    def circular(self) -> list[list[str]]:
        return detect_cycles(self.tree)

    def orphans(self) -> list[str]:
        return find_orphans(self.tree)

    def leaves(self) -> list[str]:
        return find_leaves(self.tree)

    def path_of(
        self,
        module_id: str,
        is_file: Callable[[Path], bool] = default_is_file,
    ) -> Path:
        """Display path of a module id; external ids map to nothing on disk."""
        return to_path(module_id, self.base_dir, self.extensions, is_file)

    def __len__(self) -> int:
        return len(self.tree)

    def __contains__(self, module_id: str) -> bool:
        return module_id in self.tree
