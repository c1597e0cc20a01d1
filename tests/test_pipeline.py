"""Tests for root discovery and scan orchestration."""

from pathlib import Path

import pytest

from ts_vis.errors import PatternError, RootNotFoundError
from ts_vis.models import PipelineConfig
from ts_vis.pipeline import build_scanner, run_scan
from ts_vis.project import find_project_root

FIXTURES = Path(__file__).parent / "fixtures"


class TestFindRoot:
    def test_from_file(self):
        root = find_project_root(FIXTURES / "cycle_project" / "a.ts")
        assert root == (FIXTURES / "cycle_project").resolve()

    def test_nearest_manifest_wins(self, make_project):
        root = make_project({"packages/ui/package.json": "{}", "packages/ui/src/button.ts": ""})
        assert find_project_root(root / "packages" / "ui" / "src" / "button.ts") == root / "packages" / "ui"

    def test_not_found(self, tmp_path):
        lonely = tmp_path / "lonely" / "index.ts"
        lonely.parent.mkdir()
        lonely.write_text("")
        with pytest.raises(RootNotFoundError) as exc:
            find_project_root(lonely)
        assert exc.value.start == lonely.resolve()


class TestPipeline:
    def test_run_scan_fixture(self):
        config = PipelineConfig(entry=FIXTURES / "cycle_project" / "index.ts")
        container = run_scan(config)
        assert [p.name for p in container.nodes] == ["index.ts", "a.ts", "b.ts"]

    def test_invalid_pattern_fails_before_scanning(self, tmp_path):
        # The entry does not exist: pattern errors must surface first
        config = PipelineConfig(entry=tmp_path / "nope.ts", root=tmp_path, exclude=["[oops"])
        with pytest.raises(PatternError):
            build_scanner(config)

    def test_invalid_include_pattern(self, tmp_path):
        config = PipelineConfig(entry=tmp_path / "nope.ts", root=tmp_path, include=["a**"])
        with pytest.raises(PatternError):
            build_scanner(config)

    def test_options_carried_to_scanner(self, make_project):
        root = make_project({"index.ts": ""})
        scanner = build_scanner(PipelineConfig(
            entry=root / "index.ts",
            exclude=["*/dist/*", "*/vendor/*"],
            include=["*/src/*"],
            strict=True,
            dynamic_imports=True,
        ))
        assert scanner.root == root
        assert [p.glob for p in scanner.options.exclude] == ["*/dist/*", "*/vendor/*"]
        assert [p.glob for p in scanner.options.include] == ["*/src/*"]
        assert scanner.options.strict
        assert scanner.parser.dynamic_imports

    def test_empty_include_means_no_filter(self, make_project):
        root = make_project({"index.ts": ""})
        scanner = build_scanner(PipelineConfig(entry=root / "index.ts"))
        assert scanner.options.include is None

    def test_missing_root(self, tmp_path):
        entry = tmp_path / "index.ts"
        entry.write_text("")
        with pytest.raises(RootNotFoundError):
            build_scanner(PipelineConfig(entry=entry))
