"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles

from ts_vis.web.api import router
from ts_vis.web.state import ViewerSession

STATIC_DIR = Path(__file__).parent / "static"


def create_app(entry: Path, root: Path) -> FastAPI:
    app = FastAPI(title="ts-vis", version="0.1.0")
    app.state.session = ViewerSession(entry=entry.resolve(), root=root.resolve())

    @app.middleware("http")
    async def no_cache_static(request: Request, call_next):
        response: Response = await call_next(request)
        if request.url.path.endswith((".js", ".css", ".html")) or request.url.path == "/":
            response.headers["Cache-Control"] = "no-cache"
        return response

    app.include_router(router)

    # Static files (must be last, catches all unmatched routes)
    app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="static")
    return app
