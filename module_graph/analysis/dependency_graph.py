"""Dependency graph builder: walks roots, extracts per-file dependencies, sorts the result."""

from __future__ import annotations

import functools
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from module_graph.errors import ModuleGraphError, ReadError
from module_graph.extractor.dependency_extractor import DependencyExtractor
from module_graph.models import (
    AddModuleEvent,
    DependencyTree,
    GraphConfig,
    ParseFileEvent,
    ProgressCallback,
)
from module_graph.paths import normalize
from module_graph.scanner.discovery import has_source_extension, walk_files

logger = logging.getLogger(__name__)


@dataclass
class _Parsed:
    """A loaded file: its source, plus either its dependencies or the error hit resolving them."""
    source: str
    dependencies: list[str] = field(default_factory=list)
    error: ModuleGraphError | None = None


class DependencyGraphBuilder:
    """Build the module dependency tree for a set of roots.

    The builder owns the tree for the duration of one run; create a new
    builder per run. When several files map to the same module id (``a.js``
    and ``a.coffee``), the first one in discovery order that parses cleanly
    becomes the node and the rest are skipped.
    """

    def __init__(
        self,
        config: GraphConfig,
        base_dir: Path,
        progress: ProgressCallback | None = None,
    ):
        self.config = config
        self.base_dir = base_dir
        self.progress = progress
        self.extractor = DependencyExtractor(config, base_dir)
        self.tree: DependencyTree = {}

    def build(self, roots: Iterable[Path]) -> DependencyTree:
        candidates = list(self._candidates(roots))

        if self.config.workers > 1 and len(candidates) > 1:
            self._build_parallel(candidates)
        else:
            for i, (module_id, filename) in enumerate(candidates):
                self._report(i, len(candidates))
                if module_id in self.tree:
                    continue
                try:
                    parsed = self._extract(filename)
                except ModuleGraphError as e:
                    self._handle_error(filename, e)
                    continue
                self._merge(module_id, filename, parsed)

        self._report(len(candidates), len(candidates))
        return self.tree

    def _candidates(self, roots: Iterable[Path]) -> Iterator[tuple[str, Path]]:
        """Yield (module id, filename) for every file to parse, once per file."""
        seen: set[Path] = set()
        for filename in self._discover(roots):
            if filename in seen:
                continue
            seen.add(filename)
            module_id = normalize(filename, self.base_dir, self.config.id_extensions)
            if self.config.is_excluded(module_id):
                logger.debug("Excluding %s", module_id)
                continue
            yield module_id, filename

    def _discover(self, roots: Iterable[Path]) -> Iterator[Path]:
        list_files = self.config.list_files or functools.partial(
            walk_files, skip_dirs=self.config.skip_dirs,
        )
        for root in roots:
            if root.is_dir():
                for filename in list_files(root):
                    filename = Path(filename)
                    if has_source_extension(filename, self.config.source_extensions):
                        yield filename
            elif root.exists():
                yield root
            else:
                self._handle_error(root, ReadError(root, "no such file or directory"))

    def _extract(self, filename: Path) -> _Parsed:
        """Load filename, then resolve its references.

        Load failures raise. Failures after loading are carried on the result
        so the parse event still fires for the loaded source.
        """
        if not filename.exists():
            raise ReadError(filename, "file vanished before it could be read")
        source = self.extractor.load(filename)
        try:
            dependencies = self.extractor.dependencies(filename, filename.parent, source)
        except ModuleGraphError as e:
            return _Parsed(source, error=e)
        return _Parsed(source, dependencies)

    def _merge(self, module_id: str, filename: Path, parsed: _Parsed) -> None:
        if self.config.on_parse_file:
            self.config.on_parse_file(ParseFileEvent(filename=filename, source=parsed.source))

        if parsed.error is not None:
            self._handle_error(filename, parsed.error)
            return

        self.tree[module_id] = parsed.dependencies
        logger.debug("Added %s with %d dependencies", module_id, len(parsed.dependencies))

        if self.config.on_add_module:
            self.config.on_add_module(AddModuleEvent(id=module_id, dependencies=list(parsed.dependencies)))

    def _handle_error(self, filename: Path, error: ModuleGraphError) -> None:
        if self.config.break_on_error:
            logger.error("Error while parsing file: %s", filename)
            raise error
        logger.warning("Skipping %s: %s", filename, error)

    def _build_parallel(self, candidates: list[tuple[str, Path]]) -> None:
        """Extract in a thread pool, merge on this thread in discovery order."""
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures: list[Future] = [
                executor.submit(self._extract, filename) for _, filename in candidates
            ]
            try:
                for i, ((module_id, filename), future) in enumerate(zip(candidates, futures)):
                    self._report(i, len(candidates))
                    if module_id in self.tree:
                        future.cancel()
                        continue
                    try:
                        parsed = future.result()
                    except ModuleGraphError as e:
                        self._handle_error(filename, e)
                        continue
                    self._merge(module_id, filename, parsed)
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def _report(self, current: int, total: int) -> None:
        if self.progress:
            self.progress("Parsing", current, total)


def sort_graph(tree: DependencyTree) -> DependencyTree:
    """Sort module ids and every dependency list lexicographically."""
    return {module_id: sorted(tree[module_id]) for module_id in sorted(tree)}


def find_dependents(tree: DependencyTree, module_id: str) -> list[str]:
    """Modules whose dependency list contains module_id."""
    return sorted(source for source, deps in tree.items() if module_id in deps)


def find_orphans(tree: DependencyTree) -> list[str]:
    """Modules no other module depends on."""
    referenced = {dep for source, deps in tree.items() for dep in deps if dep != source}
    return sorted(module_id for module_id in tree if module_id not in referenced)


def find_leaves(tree: DependencyTree) -> list[str]:
    return sorted(module_id for module_id, deps in tree.items() if not deps)


def detect_cycles(tree: DependencyTree) -> list[list[str]]:
    """Detect circular dependencies using DFS.

    Only edges between modules present in the tree are followed. Each cycle
    is reported once, starting and ending with the module where it was
    entered.
    """
    cycles: list[list[str]] = []
    visited: set[str] = set()
    rec_stack: set[str] = set()
    path: list[str] = []

    def dfs(node_id: str) -> None:
        visited.add(node_id)
        rec_stack.add(node_id)
        path.append(node_id)

        for neighbor in sorted(tree.get(node_id, [])):
            if neighbor not in tree:
                continue
            if neighbor not in visited:
                dfs(neighbor)
            elif neighbor in rec_stack:
                idx = path.index(neighbor)
                cycles.append(path[idx:] + [neighbor])

        path.pop()
        rec_stack.discard(node_id)

    for node_id in sorted(tree):
        if node_id not in visited:
            dfs(node_id)

    return cycles
