"""Scan orchestration: config -> scanner -> container."""

from __future__ import annotations

import logging

from ts_vis.graph import Container, Scanner
from ts_vis.models import PipelineConfig, ScannerOptions
from ts_vis.patterns import compile_patterns
from ts_vis.project import find_project_root

logger = logging.getLogger(__name__)


def build_scanner(config: PipelineConfig) -> Scanner:
    """Compile patterns and locate the root before any file is read.

    Raises PatternError for an invalid glob and RootNotFoundError when no
    root was given and none can be found.
    """
    exclude = compile_patterns(config.exclude)
    include = compile_patterns(config.include) if config.include else None
    root = config.root or find_project_root(config.entry)
    logger.debug("Root %s, exclude %s, include %s", root, config.exclude, config.include or "-")

    options = ScannerOptions(
        exclude=exclude,
        include=include,
        strict=config.strict,
        dynamic_imports=config.dynamic_imports,
    )
    return Scanner(root, options)


def run_scan(config: PipelineConfig) -> Container:
    scanner = build_scanner(config)
    return scanner.scan(config.entry)
