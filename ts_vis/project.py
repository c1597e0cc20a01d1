"""Project root discovery."""

from __future__ import annotations

from pathlib import Path

from ts_vis.errors import RootNotFoundError

MANIFEST = "package.json"


def find_project_root(entry: Path) -> Path:
    """Return the nearest directory at or above ``entry`` holding a package.json."""
    start = entry.resolve()
    for candidate in (start, *start.parents):
        if (candidate / MANIFEST).is_file():
            return candidate
    raise RootNotFoundError(start)
