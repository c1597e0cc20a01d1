"""Interactive graph viewer served over HTTP."""

from ts_vis.web.app import create_app

__all__ = ["create_app"]
