"""Exporter layer."""

from ts_vis.exporter.dot_exporter import to_dot
from ts_vis.exporter.json_exporter import to_json
from ts_vis.exporter.svg_renderer import render_svg

FORMATS = ("dot", "json", "svg")

__all__ = ["FORMATS", "render_svg", "to_dot", "to_json"]
