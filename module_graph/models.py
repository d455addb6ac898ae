"""Data models for the module-graph pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Callable, Iterable

DependencyTree = dict[str, list[str]]

Preprocessor = Callable[[Path, str], str]
ReferenceScanner = Callable[[str], list[str]]
ProgressCallback = Callable[[str, int, int], None]


@dataclass(frozen=True)
class ParseFileEvent:
    """Fired once for every file whose source was loaded."""
    filename: Path
    source: str


@dataclass(frozen=True)
class AddModuleEvent:
    """Fired once for every node added to the graph."""
    id: str
    dependencies: list[str]


@dataclass
class GraphConfig:
    """Configuration for a single graph run."""
    exclude: str | None = None
    extensions: list[str] = field(default_factory=lambda: [".js"])
    source_extensions: tuple[str, ...] = (".js", ".coffee", ".jsx")
    break_on_error: bool = False
    on_parse_file: Callable[[ParseFileEvent], None] | None = None
    on_add_module: Callable[[AddModuleEvent], None] | None = None
    is_file: Callable[[Path], bool] | None = None
    list_files: Callable[[Path], Iterable[Path]] | None = None
    paths: list[Path] = field(default_factory=list)
    skip_dirs: list[str] = field(default_factory=list)
    preprocessors: dict[str, Preprocessor] | None = None
    reference_scanner: ReferenceScanner | None = None
    workers: int = 1

    @cached_property
    def exclude_regex(self) -> re.Pattern[str] | None:
        return re.compile(self.exclude) if self.exclude else None

    def is_excluded(self, module_id: str) -> bool:
        regex = self.exclude_regex
        return regex is not None and regex.search(module_id) is not None

    @property
    def id_extensions(self) -> tuple[str, ...]:
        """Extensions stripped from file paths when building module ids."""
        merged = list(self.source_extensions)
        merged.extend(ext for ext in self.extensions if ext not in merged)
        return tuple(merged)
