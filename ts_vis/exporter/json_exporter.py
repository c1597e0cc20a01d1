"""JSON export, also the payload handed to the web viewer."""

from __future__ import annotations

import json

from ts_vis.models import GenericGraph


def graph_payload(graph: GenericGraph) -> dict:
    """Nodes with their import counts, and edges in discovery order."""
    g = graph.to_networkx()
    return {
        "nodes": [
            {"id": node, "imports": g.out_degree(node), "imported_by": g.in_degree(node)}
            for node in graph.nodes
        ],
        "edges": [{"source": s, "target": t} for s, t in graph.edges],
    }


def to_json(graph: GenericGraph) -> str:
    return json.dumps(graph_payload(graph), indent=2) + "\n"
