"""Shared extension-to-grammar mapping for the reference scanner."""

from __future__ import annotations

# Maps file extension -> tree-sitter grammar used on the (preprocessed) source
EXT_TO_GRAMMAR: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    # CoffeeScript is compiled to plain JavaScript before scanning
    ".coffee": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

DEFAULT_GRAMMAR = "javascript"


def grammar_for(suffix: str) -> str:
    return EXT_TO_GRAMMAR.get(suffix.lower(), DEFAULT_GRAMMAR)
