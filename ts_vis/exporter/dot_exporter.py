"""Graphviz DOT text export."""

from __future__ import annotations

from ts_vis.models import GenericGraph


def to_dot(graph: GenericGraph, name: str = "main") -> str:
    """Serialize nodes then edges, both in discovery order."""
    lines = [f"digraph {name} {{"]
    lines.extend(f"  {_quote(node)} [shape=record];" for node in graph.nodes)
    lines.extend(f"  {_quote(source)} -> {_quote(target)};" for source, target in graph.edges)
    lines.append("}")
    return "\n".join(lines) + "\n"


def _quote(identifier: str) -> str:
    escaped = identifier.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
