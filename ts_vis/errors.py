"""
Exception hierarchy for ts-vis.

Everything raised on purpose by the library inherits from TsVisError so
the CLI and the web API can turn it into a user-facing message in one place.
"""

from __future__ import annotations

from pathlib import Path


class TsVisError(Exception):
    """Base exception for all ts-vis errors."""


class PatternError(TsVisError):
    """A glob pattern has invalid syntax."""

    def __init__(self, glob: str, reason: str):
        self.glob = glob
        self.reason = reason
        super().__init__(f"Invalid pattern {glob!r}: {reason}")


class ParseError(TsVisError):
    """A source file could not be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ResolveError(TsVisError):
    """A module specifier could not be resolved to a file."""

    def __init__(self, specifier: str, directory: Path, reason: str = "not found"):
        self.specifier = specifier
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot resolve {specifier!r} from {directory}: {reason}")


class RootNotFoundError(TsVisError):
    """No package.json was found above the entry file."""

    def __init__(self, start: Path):
        self.start = start
        super().__init__(f"Could not find a project root (package.json) above {start}")


class ExportError(TsVisError):
    """Rendering a graph to an output format failed."""
