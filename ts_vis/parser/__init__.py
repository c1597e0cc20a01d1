"""Source parser: turns a JS/TS file into its requested module specifiers."""

from __future__ import annotations

from ts_vis.parser.language_map import EXT_TO_GRAMMAR
from ts_vis.parser.treesitter_parser import SourceParser

__all__ = [
    "EXT_TO_GRAMMAR",
    "SourceParser",
]
