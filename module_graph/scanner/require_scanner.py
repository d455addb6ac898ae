"""Collects require() references using tree-sitter."""

from __future__ import annotations

import threading

from module_graph.scanner.language_map import DEFAULT_GRAMMAR

try:
    from tree_sitter_language_pack import get_parser
except ImportError as _err:
    raise ImportError(
        "tree-sitter-language-pack is required. Install with: "
        "pip install tree-sitter-language-pack"
    ) from _err

_STRING_TYPES = {"string", "template_string"}


class RequireScanner:
    """Finds the string argument of every require(...) call in a source.

    Only literal arguments count: require(name) or require('a' + b) cannot be
    resolved statically and are ignored. Template strings are accepted when
    they contain no substitution.
    """

    def __init__(self, grammar: str = DEFAULT_GRAMMAR):
        self.grammar = grammar
        # tree-sitter parsers are not safe to share between threads
        self._local = threading.local()

    def __call__(self, source: str) -> list[str]:
        return self.scan(source)

    def scan(self, source: str) -> list[str]:
        source_bytes = source.encode("utf-8")
        tree = self._get_parser().parse(source_bytes)

        references: list[str] = []
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "call_expression":
                reference = self._require_argument(node)
                if reference:
                    references.append(reference)
            stack.extend(reversed(node.children))
        return references

    def _require_argument(self, node) -> str | None:
        func = node.child_by_field_name("function")
        if func is None or func.type != "identifier" or func.text != b"require":
            return None

        args = node.child_by_field_name("arguments")
        if args is None or args.named_child_count != 1:
            return None

        arg = args.named_children[0]
        if arg.type not in _STRING_TYPES:
            return None
        if any(child.type == "template_substitution" for child in arg.children):
            return None
        return arg.text[1:-1].decode("utf-8", errors="replace")

    def _get_parser(self):
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = get_parser(self.grammar)
            self._local.parser = parser
        return parser


_scanners: dict[str, RequireScanner] = {}
_scanners_lock = threading.Lock()


def scanner_for(grammar: str) -> RequireScanner:
    with _scanners_lock:
        if grammar not in _scanners:
            _scanners[grammar] = RequireScanner(grammar)
        return _scanners[grammar]


def extract_references(source: str, grammar: str = DEFAULT_GRAMMAR) -> list[str]:
    """Return raw require() references of source, in source order."""
    return scanner_for(grammar).scan(source)
