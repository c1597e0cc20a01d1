"""Tests for the tree-sitter source parser."""

import pytest
from pathlib import Path

from ts_vis.errors import ParseError

# Only run if tree-sitter is installed
try:
    from ts_vis.parser import SourceParser
    HAS_TREESITTER = True
except ImportError:
    HAS_TREESITTER = False

pytestmark = pytest.mark.skipif(not HAS_TREESITTER, reason="tree-sitter not installed")


@pytest.fixture
def parser():
    return SourceParser()


def _write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding="utf-8")
    return path


def test_static_imports_in_document_order(parser, tmp_path):
    path = _write(tmp_path, "index.ts", """
import { a } from "./a";
import b from './b';
import * as c from "./c";
import "./side-effect";
const x = 1;
""")
    assert parser.parse_file(path) == ["./a", "./b", "./c", "./side-effect"]


def test_reexports(parser, tmp_path):
    path = _write(tmp_path, "barrel.ts", """
export * from "./one";
export { two } from "./two";
export * as three from "./three";
export const local = 1;
""")
    assert parser.parse_file(path) == ["./one", "./two", "./three"]


def test_typescript_only_forms(parser, tmp_path):
    path = _write(tmp_path, "types.ts", """
import type { Config } from "./config";
import fs = require("fs");
""")
    assert parser.parse_file(path) == ["./config", "fs"]


def test_duplicate_specifiers_reported_once(parser, tmp_path):
    path = _write(tmp_path, "dup.ts", """
import { a } from "./a";
import { b } from "./b";
import { a2 } from "./a";
""")
    assert parser.parse_file(path) == ["./a", "./b"]


def test_dynamic_imports_ignored_by_default(parser, tmp_path):
    path = _write(tmp_path, "lazy.js", """
import x from "./static";
const y = require("./required");
async function load() { return import("./lazy"); }
""")
    assert parser.parse_file(path) == ["./static"]


def test_dynamic_imports_when_enabled(tmp_path):
    path = _write(tmp_path, "lazy.js", """
import x from "./static";
const y = require("./required");
async function load() { return import("./lazy"); }
const z = require(name);
""")
    assert SourceParser(dynamic_imports=True).parse_file(path) == [
        "./static", "./required", "./lazy",
    ]


def test_jsx_file(parser, tmp_path):
    path = _write(tmp_path, "App.jsx", """
import React from "react";
import Button from "./Button";
export default function App() { return <Button label="hi" />; }
""")
    assert parser.parse_file(path) == ["react", "./Button"]


def test_tsx_file(parser, tmp_path):
    path = _write(tmp_path, "App.tsx", """
import { Card } from "./Card";
export const App = (props: { n: number }) => <Card n={props.n} />;
""")
    assert parser.parse_file(path) == ["./Card"]


def test_non_script_files_have_no_imports(parser, tmp_path):
    path = _write(tmp_path, "data.json", '{"import": "./x"}')
    assert parser.parse_file(path) == []


def test_syntax_error_raises(parser, tmp_path):
    path = _write(tmp_path, "broken.ts", "import { from './a';\nexport const = ;\n")
    with pytest.raises(ParseError) as exc:
        parser.parse_file(path)
    assert exc.value.path == path
    assert "syntax error" in exc.value.reason


def test_unreadable_file_raises(parser, tmp_path):
    with pytest.raises(ParseError) as exc:
        parser.parse_file(tmp_path / "missing.ts")
    assert "cannot read" in exc.value.reason


def test_parse_source_directly(parser):
    specs = parser.parse_source(b'import a from "./a";\n', "javascript")
    assert specs == ["./a"]


def test_escape_sequences_are_decoded(parser, tmp_path):
    path = _write(tmp_path, "index.ts", r"""
import "./caf\u00e9";
import './x\x2ets';
import "./\u{1F600}";
import "./quote\"d";
""")
    assert parser.parse_file(path) == ["./café", "./x.ts", "./\U0001F600", './quote"d']
