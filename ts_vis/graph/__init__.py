"""Import graph traversal and accumulation."""

from __future__ import annotations

from ts_vis.graph.container import Container
from ts_vis.graph.scanner import Scanner

__all__ = [
    "Container",
    "Scanner",
]
