"""In-memory state for the viewer, one session per app."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ts_vis.graph import Container
from ts_vis.models import DEFAULT_EXCLUDE


@dataclass
class ViewerSession:
    entry: Path
    root: Path
    filters: list[str] = field(default_factory=lambda: [DEFAULT_EXCLUDE])
    includes: list[str] = field(default_factory=list)
    container: Container | None = None
    scanned_at: str | None = None

    def store(self, container: Container, filters: list[str], includes: list[str]) -> None:
        self.container = container
        self.filters = list(filters)
        self.includes = list(includes)
        self.scanned_at = datetime.now().isoformat()
