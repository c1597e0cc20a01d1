"""FastAPI routes for the ts-vis viewer."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from ts_vis.errors import TsVisError
from ts_vis.exporter import to_dot
from ts_vis.exporter.json_exporter import graph_payload
from ts_vis.graph import Container
from ts_vis.models import PipelineConfig
from ts_vis.patterns import compile_patterns
from ts_vis.pipeline import run_scan
from ts_vis.web.state import ViewerSession

router = APIRouter(prefix="/api")


# --- Request models ---

class ScanRequest(BaseModel):
    filters: list[str] = []
    includes: list[str] = []


class MaterializeRequest(BaseModel):
    includes: list[str] = []


# --- Helpers ---

def _session(request: Request) -> ViewerSession:
    return request.app.state.session


def _scanned(session: ViewerSession) -> Container:
    if session.container is None:
        raise HTTPException(409, "Nothing scanned yet")
    return session.container


def _response(container: Container, includes: list[str]) -> dict:
    try:
        patterns = compile_patterns(includes) if includes else None
    except TsVisError as e:
        raise HTTPException(400, str(e))
    graph = container.materialize(patterns)
    return {
        **graph_payload(graph),
        "total_nodes": len(container.nodes),
        "total_edges": len(container.edges),
        "diagnostics": [
            {"path": str(d.path), "message": d.message} for d in container.diagnostics
        ],
    }


# --- Endpoints ---

@router.get("/config")
async def get_config(request: Request):
    session = _session(request)
    return {
        "entry": str(session.entry),
        "root": str(session.root),
        "filters": session.filters,
        "includes": session.includes,
        "scanned_at": session.scanned_at,
    }


@router.post("/scan")
async def scan(req: ScanRequest, request: Request):
    session = _session(request)
    filters = [f for f in req.filters if f.strip()]
    includes = [i for i in req.includes if i.strip()]
    config = PipelineConfig(
        entry=session.entry,
        root=session.root,
        exclude=filters,
        include=includes,
    )
    try:
        container = await asyncio.to_thread(run_scan, config)
    except TsVisError as e:
        raise HTTPException(400, str(e))

    session.store(container, filters, includes)
    return _response(container, includes)


@router.post("/materialize")
async def materialize(req: MaterializeRequest, request: Request):
    """Re-filter the last scan with other include patterns, without rescanning."""
    session = _session(request)
    container = _scanned(session)
    includes = [i for i in req.includes if i.strip()]
    result = _response(container, includes)
    session.includes = includes
    return result


@router.get("/dot", response_class=PlainTextResponse)
async def get_dot(request: Request):
    session = _session(request)
    container = _scanned(session)
    patterns = compile_patterns(session.includes) if session.includes else None
    return PlainTextResponse(to_dot(container.materialize(patterns)), media_type="text/vnd.graphviz")
