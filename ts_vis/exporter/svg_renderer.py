"""SVG rendering through the Graphviz ``dot`` binary."""

from __future__ import annotations

import logging
import shutil
import subprocess

from ts_vis.errors import ExportError
from ts_vis.exporter.dot_exporter import to_dot
from ts_vis.models import GenericGraph

logger = logging.getLogger(__name__)

DOT_BINARY = "dot"


def render_svg(graph: GenericGraph, timeout: float = 120.0) -> bytes:
    binary = shutil.which(DOT_BINARY)
    if binary is None:
        raise ExportError(
            "Graphviz is required for SVG output. Install it so that `dot` is on PATH, "
            "or use --format dot"
        )

    logger.debug("Rendering %d nodes with %s", len(graph.nodes), binary)
    try:
        proc = subprocess.run(
            [binary, "-Tsvg"],
            input=to_dot(graph).encode("utf-8"),
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ExportError(f"Graphviz timed out after {timeout:.0f}s") from e

    if proc.returncode != 0:
        detail = proc.stderr.decode("utf-8", errors="replace").strip()
        raise ExportError(f"Graphviz failed with exit code {proc.returncode}: {detail}")
    return proc.stdout
