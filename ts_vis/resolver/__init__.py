"""Module resolver: maps a specifier and a base directory to a file."""

from __future__ import annotations

from ts_vis.resolver.node_resolver import ModuleResolver
from ts_vis.resolver.tsconfig import TsconfigPaths, load_tsconfig

__all__ = [
    "ModuleResolver",
    "TsconfigPaths",
    "load_tsconfig",
]
