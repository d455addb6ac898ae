"""Per-file dependency extraction."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from module_graph.errors import ScanError, UnresolvedModuleError
from module_graph.extractor.loader import load_source
from module_graph.models import GraphConfig
from module_graph.paths import normalize
from module_graph.resolver import resolve_module
from module_graph.scanner.language_map import grammar_for
from module_graph.scanner.require_scanner import extract_references

logger = logging.getLogger(__name__)

_REQUIRE_MARKER_RE = re.compile(r"require\s*\(", re.MULTILINE)

# module.exports = SomeName, where SomeName is a capitalized bare identifier.
# Object literals, lowercase functions and member expressions are not matched.
_SELF_EXPORT_RE = re.compile(
    r"module\.exports\s*=\s*([A-Z][\w$]*)(?![\w$]|\s*[.(\[])",
)


def find_self_exports(source: str) -> list[str]:
    """Names a file assigns to module.exports.

    A heuristic, not a scope analysis: a reference spelled like one of these
    names (ignoring case) is the file pointing at its own export rather than
    at another module.
    """
    return [m.group(1) for m in _SELF_EXPORT_RE.finditer(source)]


class DependencyExtractor:
    """Extracts the module ids a single file depends on."""

    def __init__(self, config: GraphConfig, base_dir: Path):
        self.config = config
        self.base_dir = base_dir

    def extract(self, filename: Path, directory: Path) -> tuple[str, list[str]]:
        """Return (source, dependency ids) for filename.

        References are resolved relative to directory.
        """
        source = self.load(filename)
        return source, self.dependencies(filename, directory, source)

    def load(self, filename: Path) -> str:
        return load_source(filename, self.config)

    def dependencies(self, filename: Path, directory: Path, source: str) -> list[str]:
        """Dependency ids of already loaded source."""
        if not _REQUIRE_MARKER_RE.search(source):
            return []

        exported = {name.lower() for name in find_self_exports(source)}

        dependencies: list[str] = []
        for reference in self._scan(filename, source):
            if reference.lower() in exported:
                logger.debug("%s: %r refers to its own export", filename, reference)
                continue

            module_id = self._resolve(directory, reference)
            if self.config.is_excluded(module_id) or module_id in dependencies:
                continue
            dependencies.append(module_id)

        return dependencies

    def _scan(self, filename: Path, source: str) -> list[str]:
        try:
            if self.config.reference_scanner is not None:
                return list(self.config.reference_scanner(source))
            return extract_references(source, grammar_for(filename.suffix))
        except Exception as e:
            raise ScanError(filename, str(e)) from e

    def _resolve(self, directory: Path, reference: str) -> str:
        try:
            resolved = resolve_module(directory, reference, self.config)
        except UnresolvedModuleError:
            if self.config.break_on_error:
                logger.error("Error while resolving module from: %s", reference)
                raise
            logger.warning("Cannot find module %r from %s", reference, directory)
            return reference

        if resolved is None:
            return reference
        return normalize(resolved, self.base_dir, self.config.id_extensions)
