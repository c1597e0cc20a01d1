"""Data models for the ts-vis scan pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import networkx as nx

from ts_vis.patterns import Pattern

DEFAULT_EXCLUDE = "*node_modules/*"

# Resolution order when a specifier has no extension
DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts", ".js", ".json", ".node")


@dataclass(frozen=True)
class ImportEdge:
    """``source`` contains an import whose specifier resolved to ``target``."""
    source: Path
    target: Path


@dataclass(frozen=True)
class ScanDiagnostic:
    """A file that was reached but whose imports could not be followed."""
    path: Path
    message: str


@dataclass(frozen=True)
class ScannerOptions:
    """Traversal settings, fixed for the lifetime of a Scanner."""
    exclude: list[Pattern] = field(default_factory=lambda: [Pattern.compile(DEFAULT_EXCLUDE)])
    include: list[Pattern] | None = None
    strict: bool = False
    dynamic_imports: bool = False


@dataclass(frozen=True)
class ResolverOptions:
    """Module resolution settings."""
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    prefer_relative: bool = True
    tsconfig: Path | None = None


@dataclass
class PipelineConfig:
    """Raw, uncompiled configuration for a single scan."""
    entry: Path
    root: Path | None = None
    exclude: list[str] = field(default_factory=lambda: [DEFAULT_EXCLUDE])
    include: list[str] = field(default_factory=list)
    strict: bool = False
    dynamic_imports: bool = False


@dataclass
class GenericGraph:
    """A filtered, directed import graph keyed by path strings.

    ``nodes`` and ``edges`` keep discovery order; parallel edges are kept.
    """
    nodes: list[str] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)

    def to_networkx(self) -> nx.MultiDiGraph:
        g = nx.MultiDiGraph()
        g.add_nodes_from(self.nodes)
        g.add_edges_from(self.edges)
        return g
