"""File discovery and require() reference scanning."""

from __future__ import annotations

from module_graph.scanner.discovery import has_source_extension, walk_files
from module_graph.scanner.language_map import EXT_TO_GRAMMAR, grammar_for
from module_graph.scanner.require_scanner import RequireScanner, extract_references

__all__ = [
    "EXT_TO_GRAMMAR",
    "RequireScanner",
    "extract_references",
    "grammar_for",
    "has_source_extension",
    "walk_files",
]
