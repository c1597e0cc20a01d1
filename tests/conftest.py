"""Shared fixtures: build small JS/TS projects on disk."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def make_project(tmp_path):
    """Write ``{relative_path: source}`` under a fresh root holding a package.json."""

    def _make(files: dict[str, str], manifest: bool = True) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        if manifest:
            (root / "package.json").write_text('{"name": "fixture"}\n', encoding="utf-8")
        for rel, source in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return root.resolve()

    return _make
