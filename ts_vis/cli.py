"""Click CLI with graph and serve subcommands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ts_vis.errors import TsVisError
from ts_vis.exporter import FORMATS, render_svg, to_dot, to_json
from ts_vis.models import DEFAULT_EXCLUDE, PipelineConfig
from ts_vis.pipeline import build_scanner, run_scan
from ts_vis.project import find_project_root

_ENTRY = click.Path(exists=True, dir_okay=False, path_type=Path)
_ROOT = click.Path(exists=True, file_okay=False, path_type=Path)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """ts-vis: Visualize the import graph of a JavaScript/TypeScript project."""


@cli.command()
@click.argument("entry", type=_ENTRY)
@click.option("--cwd", "-c", "root", type=_ROOT, help="Project root (default: nearest package.json)")
@click.option("--filter", "-f", "filters", multiple=True, default=[DEFAULT_EXCLUDE], show_default=True,
              help="Glob of files never traversed into (repeatable)")
@click.option("--include", "-i", "includes", multiple=True,
              help="Glob of files shown in the output (repeatable)")
@click.option("--format", "output_format", type=click.Choice(FORMATS), default="dot", show_default=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to a file")
@click.option("--strict", is_flag=True, help="Abort on the first unreadable or unparsable file")
@click.option("--dynamic-imports", is_flag=True, help="Also follow import() and require() calls")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
def graph(
    entry: Path,
    root: Path | None,
    filters: tuple[str, ...],
    includes: tuple[str, ...],
    output_format: str,
    output: Path | None,
    strict: bool,
    dynamic_imports: bool,
    verbose: bool,
):
    """Scan ENTRY and print its import graph."""
    _setup_logging(verbose)
    config = PipelineConfig(
        entry=entry,
        root=root,
        exclude=list(filters),
        include=list(includes),
        strict=strict,
        dynamic_imports=dynamic_imports,
    )

    try:
        container = run_scan(config)
        result = container.materialize()
        if output_format == "svg":
            data = render_svg(result)
        elif output_format == "json":
            data = to_json(result).encode("utf-8")
        else:
            data = to_dot(result).encode("utf-8")
    except TsVisError as e:
        raise click.ClickException(str(e))

    for diag in container.diagnostics:
        click.echo(click.style(f"warning: skipped imports of {diag.path}: {diag.message}", fg="yellow"), err=True)

    if output is not None:
        output.write_bytes(data)
        click.echo(f"Wrote {len(result.nodes)} file(s), {len(result.edges)} import(s) to {output}", err=True)
    else:
        click.get_binary_stream("stdout").write(data)


@cli.command()
@click.argument("entry", type=_ENTRY)
@click.option("--cwd", "-c", "root", type=_ROOT, help="Project root (default: nearest package.json)")
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
@click.option("--open/--no-open", default=True, help="Open browser automatically")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
def serve(entry: Path, root: Path | None, port: int, host: str, open: bool, verbose: bool):
    """Start the interactive graph viewer."""
    _setup_logging(verbose)
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the viewer. "
            "Install with: pip install 'ts-vis[web]'"
        )

    from ts_vis.web import create_app

    try:
        root = root or find_project_root(entry)
        # Fail fast on an unusable configuration
        build_scanner(PipelineConfig(entry=entry, root=root))
    except TsVisError as e:
        raise click.ClickException(str(e))

    click.echo(f"Starting ts-vis viewer at http://{host}:{port}")

    if open:
        import threading
        import webbrowser
        threading.Timer(1.0, lambda: webbrowser.open(f"http://{host}:{port}")).start()

    uvicorn.run(create_app(entry, root), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
