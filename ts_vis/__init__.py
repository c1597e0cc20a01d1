"""ts-vis: import graph discovery for JavaScript/TypeScript projects."""

from ts_vis.errors import (
    ExportError,
    ParseError,
    PatternError,
    ResolveError,
    RootNotFoundError,
    TsVisError,
)
from ts_vis.graph import Container, Scanner
from ts_vis.models import GenericGraph, PipelineConfig, ResolverOptions, ScannerOptions
from ts_vis.patterns import Pattern, compile_patterns, matches_any
from ts_vis.project import find_project_root

__version__ = "0.1.0"

__all__ = [
    "Container",
    "ExportError",
    "GenericGraph",
    "ParseError",
    "Pattern",
    "PatternError",
    "PipelineConfig",
    "ResolveError",
    "ResolverOptions",
    "RootNotFoundError",
    "Scanner",
    "ScannerOptions",
    "TsVisError",
    "compile_patterns",
    "find_project_root",
    "matches_any",
]
