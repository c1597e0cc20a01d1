"""Tree-sitter parser that lists the module specifiers a JS/TS file requests."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ts_vis.errors import ParseError
from ts_vis.parser.language_map import EXT_TO_GRAMMAR

try:
    from tree_sitter_language_pack import get_parser
except ImportError as _err:
    raise ImportError(
        "tree-sitter-language-pack is required. Install with: "
        "pip install tree-sitter-language-pack"
    ) from _err

logger = logging.getLogger(__name__)

# Statements whose `source` field names a module
_STATIC_TYPES = {"import_statement", "export_statement"}

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.S)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = ("\n", "\r", "\r\n", "\u2028", "\u2029")


class SourceParser:
    """Extracts requested module specifiers in document order.

    Static imports, re-exports and TypeScript ``import x = require(...)`` are
    always collected. ``import("...")`` and ``require("...")`` calls with a
    single string literal are collected when ``dynamic_imports`` is set.
    Duplicate specifier strings are reported once.
    """

    def __init__(self, dynamic_imports: bool = False):
        self.dynamic_imports = dynamic_imports
        self._parser_cache: dict[str, object] = {}

    def parse_file(self, file_path: Path) -> list[str]:
        grammar_name = EXT_TO_GRAMMAR.get(file_path.suffix)
        if grammar_name is None:
            # .json, .node and friends never import anything
            return []
        try:
            source_bytes = file_path.read_bytes()
        except OSError as e:
            raise ParseError(file_path, f"cannot read file: {e.strerror or e}") from e
        return self.parse_source(source_bytes, grammar_name, file_path)

    def parse_source(
        self, source_bytes: bytes, grammar_name: str, file_path: Path | None = None,
    ) -> list[str]:
        parser = self._get_parser(grammar_name)
        tree = parser.parse(source_bytes)
        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            raise ParseError(file_path or Path("<source>"), f"syntax error near line {line}")

        specifiers: list[str] = []
        seen: set[str] = set()
        for spec in self._walk(tree.root_node):
            if spec not in seen:
                seen.add(spec)
                specifiers.append(spec)
        return specifiers

    def _get_parser(self, grammar_name: str):
        if grammar_name not in self._parser_cache:
            self._parser_cache[grammar_name] = get_parser(grammar_name)
        return self._parser_cache[grammar_name]

    def _walk(self, root):
        """Pre-order walk yielding specifiers as they appear in the source."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in _STATIC_TYPES:
                spec = _static_source(node)
                if spec is not None:
                    yield spec
            elif self.dynamic_imports and node.type == "call_expression":
                spec = _dynamic_source(node)
                if spec is not None:
                    yield spec
            stack.extend(reversed(node.children))


def _static_source(node) -> str | None:
    source = node.child_by_field_name("source")
    if source is None:
        # import x = require("...")
        for child in node.children:
            if child.type == "import_require_clause":
                source = child.child_by_field_name("source")
                break
    if source is None or source.type != "string":
        return None
    return _string_value(source)


def _dynamic_source(node) -> str | None:
    func = node.child_by_field_name("function")
    args = node.child_by_field_name("arguments")
    if func is None or args is None:
        return None
    if func.type != "import" and not (func.type == "identifier" and func.text == b"require"):
        return None
    named = args.named_children
    if len(named) != 1 or named[0].type != "string":
        return None
    return _string_value(named[0])


def _string_value(node) -> str:
    raw = node.text.decode("utf-8", errors="replace")[1:-1]
    return _ESCAPE.sub(_unescape, raw) if "\\" in raw else raw


def _unescape(match: re.Match) -> str:
    esc = match.group(1)
    if esc in _LINE_CONTINUATIONS:
        return ""
    if len(esc) > 1 and esc[0] in "ux":
        digits = esc[2:-1] if esc[1] == "{" else esc[1:]
        code = int(digits, 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    return _SIMPLE_ESCAPES.get(esc, esc)


def _first_error_line(root) -> int:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed(node.children))
    return 1
