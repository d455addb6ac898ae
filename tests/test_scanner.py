"""Tests for file discovery and the require() scanner."""

from pathlib import Path

import pytest

from module_graph.scanner import RequireScanner, extract_references, grammar_for, walk_files
from module_graph.scanner.discovery import has_source_extension

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def scanner():
    return RequireScanner()


def test_collects_references_in_source_order(scanner):
    source = (FIXTURES / "cjs" / "a.js").read_text()
    assert scanner.scan(source) == ["fs", "./b", "./sub/c"]


def test_keeps_duplicates_for_the_caller(scanner):
    assert scanner.scan("require('./b'); require('./b');") == ["./b", "./b"]


def test_ignores_dynamic_requires(scanner):
    source = "var name = './x'; require(name); require('./' + name); require();"
    assert scanner.scan(source) == []


def test_template_strings(scanner):
    assert scanner.scan("require(`./plain`);") == ["./plain"]
    assert scanner.scan("require(`./${name}`);") == []


def test_ignores_member_calls_named_require(scanner):
    assert scanner.scan("loader.require('./x'); require.resolve('./y');") == []


def test_nested_requires(scanner):
    source = """
    function lazy() {
      if (ready) {
        return require("./deep/thing");
      }
    }
    var a = wrap(require('a'));
    """
    assert scanner.scan(source) == ["./deep/thing", "a"]


def test_requires_inside_comments_and_strings_are_ignored(scanner):
    source = "// require('./commented')\nvar s = \"require('./quoted')\";\n"
    assert scanner.scan(source) == []


def test_jsx_source():
    source = (FIXTURES / "cjs" / "component.jsx").read_text()
    assert extract_references(source, grammar_for(".jsx")) == ["react", "./b"]


def test_grammar_for_unknown_extension():
    assert grammar_for(".es6") == "javascript"
    assert grammar_for(".tsx") == "tsx"


def test_walk_files_is_stable_and_recursive():
    root = FIXTURES / "cjs"
    names = [p.relative_to(root).as_posix() for p in walk_files(root)]
    assert names == [p.relative_to(root).as_posix() for p in walk_files(root)]
    assert "sub/c.js" in names
    assert "notes.txt" in names


def test_walk_files_skip_dirs():
    root = FIXTURES / "cjs"
    names = [p.relative_to(root).as_posix() for p in walk_files(root, skip_dirs=["vend*"])]
    assert "vendor/lib.js" not in names
    assert "sub/c.js" in names


def test_has_source_extension():
    exts = (".js", ".coffee", ".jsx")
    assert has_source_extension(Path("a.js"), exts)
    assert has_source_extension(Path("b.coffee"), exts)
    assert not has_source_extension(Path("notes.txt"), exts)
    assert not has_source_extension(Path("a.json"), exts)
