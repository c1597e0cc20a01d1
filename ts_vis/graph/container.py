"""Graph accumulator filled by a single scan."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ts_vis.models import GenericGraph, ImportEdge, ScanDiagnostic
from ts_vis.patterns import Pattern, matches_any

_UNSET: Any = object()


class Container:
    """Files and import edges discovered by one scan.

    ``nodes`` holds each visited file once, in first-visit order. ``edges``
    holds every recorded import in discovery order, duplicates included.
    The scanner seals the container when the scan returns; after that it is
    read-only and can be materialized any number of times.
    """

    def __init__(self, include: list[Pattern] | None = None):
        self.include = list(include) if include is not None else None
        self._nodes: list[Path] = []
        self._visited: set[Path] = set()
        self._edges: list[ImportEdge] = []
        self._diagnostics: list[ScanDiagnostic] = []
        self._sealed = False

    @property
    def nodes(self) -> tuple[Path, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> tuple[ImportEdge, ...]:
        return tuple(self._edges)

    @property
    def diagnostics(self) -> tuple[ScanDiagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __contains__(self, path: Path) -> bool:
        return path in self._visited

    def __len__(self) -> int:
        return len(self._nodes)

    # ── Mutators (scanner only) ─────────────────────────────

    def record_node(self, path: Path) -> None:
        self._check_open()
        if path in self._visited:
            raise ValueError(f"{path} was already recorded")
        self._visited.add(path)
        self._nodes.append(path)

    def record_edge(self, source: Path, target: Path) -> None:
        self._check_open()
        self._edges.append(ImportEdge(source, target))

    def record_diagnostic(self, path: Path, message: str) -> None:
        self._check_open()
        self._diagnostics.append(ScanDiagnostic(path, message))

    def seal(self) -> None:
        self._sealed = True

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("Container is read-only once the scan has returned")

    # ── Materialization ─────────────────────────────────────

    def materialize(self, include: list[Pattern] | None = _UNSET) -> GenericGraph:
        """Build the exported graph, keeping only included nodes.

        A node survives when there is no inclusion filter or it matches at
        least one inclusion pattern; an edge survives when both endpoints do.
        ``include`` overrides the patterns captured when the scan started.
        """
        patterns = self.include if include is _UNSET else include

        def keep(path: Path) -> bool:
            return patterns is None or matches_any(patterns, path)

        kept = {path for path in self._nodes if keep(path)}
        return GenericGraph(
            nodes=[str(path) for path in self._nodes if path in kept],
            edges=[
                (str(edge.source), str(edge.target))
                for edge in self._edges
                if edge.source in kept and edge.target in kept
            ],
        )
