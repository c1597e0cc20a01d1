"""Tests for glob pattern compilation and matching."""

import pytest
from pathlib import Path

from ts_vis.errors import PatternError
from ts_vis.patterns import Pattern, compile_patterns, matches_any


class TestCompile:
    def test_valid_globs(self):
        for glob in ["*node_modules/*", "*/src/*", "**/*.ts", "src/**", "a?c", "[abc]*", "[!x]y", "[]]"]:
            assert Pattern.compile(glob).glob == glob

    def test_unclosed_class(self):
        with pytest.raises(PatternError) as exc:
            Pattern.compile("src/[abc")
        assert exc.value.glob == "src/[abc"
        assert "unclosed" in str(exc.value)

    def test_recursive_wildcard_must_be_component(self):
        for glob in ["a**", "**a", "src/**x/*.ts"]:
            with pytest.raises(PatternError):
                Pattern.compile(glob)

    def test_triple_star(self):
        with pytest.raises(PatternError):
            Pattern.compile("***")

    def test_compile_patterns_stops_on_first_error(self):
        with pytest.raises(PatternError) as exc:
            compile_patterns(["*.ts", "[", "*.js"])
        assert exc.value.glob == "["


class TestMatch:
    def test_star_crosses_separators(self):
        p = Pattern.compile("*node_modules/*")
        assert p.matches("/home/u/app/node_modules/left-pad/index.js")
        assert p.matches(Path("/app/node_modules/@scope/pkg/lib/a.js"))
        assert not p.matches("/home/u/app/src/index.ts")

    def test_whole_string_is_matched(self):
        p = Pattern.compile("*/src/*")
        assert p.matches("/repo/src/a.ts")
        assert not p.matches("/repo/lib/a.ts")
        assert not Pattern.compile("src").matches("/repo/src")

    def test_question_mark_and_classes(self):
        assert Pattern.compile("*/v?.ts").matches("/x/v1.ts")
        assert Pattern.compile("*/[ab].ts").matches("/x/b.ts")
        assert not Pattern.compile("*/[!ab].ts").matches("/x/a.ts")

    def test_case_sensitive(self):
        assert not Pattern.compile("*/SRC/*").matches("/repo/src/a.ts")

    def test_matches_any_is_or(self):
        patterns = compile_patterns(["*/vendor/*", "*.json"])
        assert matches_any(patterns, "/p/vendor/x.js")
        assert matches_any(patterns, "/p/data.json")
        assert not matches_any(patterns, "/p/src/a.ts")

    def test_matches_any_empty(self):
        assert not matches_any([], "/anything")

    def test_str_is_glob(self):
        assert str(Pattern.compile("*.ts")) == "*.ts"

    def test_recursive_wildcard_matches_zero_directories(self):
        p = Pattern.compile("*/src/**/*.ts")
        assert p.matches("/p/src/x.ts")
        assert p.matches("/p/src/deep/er/x.ts")
        assert not p.matches("/p/lib/x.ts")
        assert Pattern.compile("/p/**/x.ts").matches("/p/x.ts")
        assert Pattern.compile("**/*.ts").matches("a.ts")

    def test_recursive_wildcard_at_end(self):
        p = Pattern.compile("/p/src/**")
        assert p.matches("/p/src/a/b.ts")
        assert not p.matches("/p/lib/a.ts")

    def test_special_characters_are_literal(self):
        assert Pattern.compile("*/a+b(1).ts").matches("/x/a+b(1).ts")
        assert not Pattern.compile("*/a.ts").matches("/x/abts")
