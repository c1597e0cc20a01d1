"""Traversal engine: walks the import graph depth-first from an entry file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ts_vis.errors import ParseError, ResolveError
from ts_vis.graph.container import Container
from ts_vis.models import ResolverOptions, ScannerOptions
from ts_vis.parser import SourceParser
from ts_vis.patterns import matches_any
from ts_vis.resolver import ModuleResolver

logger = logging.getLogger(__name__)


class Scanner:
    """Discovers the files reachable from an entry file through imports.

    The walk is depth-first and uses an explicit stack of per-file target
    iterators, so nodes and edges come out in the same order a recursive
    walk would produce, without being limited by the interpreter's
    recursion depth.
    """

    def __init__(
        self,
        root: Path,
        options: ScannerOptions | None = None,
        *,
        parser: SourceParser | None = None,
        resolver: ModuleResolver | None = None,
    ):
        self.root = root.resolve()
        self.options = options or ScannerOptions()
        self.parser = parser or SourceParser(dynamic_imports=self.options.dynamic_imports)
        self.resolver = resolver or ModuleResolver(
            ResolverOptions(tsconfig=self.root / "tsconfig.json"),
        )

    def scan(self, entry: Path) -> Container:
        entry = entry.resolve()
        logger.info("Scanning from %s (root %s)", entry, self.root)
        container = Container(self.options.include)

        stack: list[tuple[Path, Iterator[Path]]] = [self._visit(container, entry)]
        while stack:
            source, targets = stack[-1]
            target = next(targets, None)
            if target is None:
                stack.pop()
                continue
            container.record_edge(source, target)
            if target in container:
                continue
            stack.append(self._visit(container, target))

        container.seal()
        logger.info(
            "Scan finished: %d files, %d imports, %d skipped",
            len(container.nodes), len(container.edges), len(container.diagnostics),
        )
        return container

    def _visit(self, container: Container, path: Path) -> tuple[Path, Iterator[Path]]:
        try:
            specifiers = self.parser.parse_file(path)
        except ParseError as e:
            if self.options.strict:
                raise
            logger.warning("Skipping imports of %s", e)
            container.record_diagnostic(path, e.reason)
            specifiers = []
        container.record_node(path)
        return path, self._targets(path, specifiers)

    def _targets(self, path: Path, specifiers: list[str]) -> Iterator[Path]:
        """Resolved, non-excluded import targets of ``path``, in specifier order."""
        directory = path.parent
        for specifier in specifiers:
            try:
                target = self.resolver.resolve(directory, specifier)
            except ResolveError as e:
                logger.debug("Dropping import: %s", e)
                continue
            if matches_any(self.options.exclude, target):
                logger.debug("Excluded %s (imported by %s)", target, path)
                continue
            yield target
