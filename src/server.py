"""Main FastAPI server for the full-duplex voice gateway."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from pydantic import BaseModel
from fastapi.responses import ORJSONResponse
from fastapi import FastAPI, Request, WebSocket, HTTPException

from src.providers.capability import Capability
from src.config.websocket import WS_ENDPOINT_PATH
from src.runtime.logging import configure_logging
from src.runtime.dependencies import build_runtime_deps
from src.errors import ProviderSetupError, ProviderNotFoundError
from src.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()


class ProviderChange(BaseModel):
    name: str


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = await build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    logger.info("runtime: ready")
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)


def _runtime_deps(request: Request):
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise HTTPException(status_code=503, detail="runtime is not initialized")
    return runtime_deps


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/status")
async def status(request: Request) -> dict:
    runtime_deps = _runtime_deps(request)
    return {
        "connections": runtime_deps.connections.count(),
        "max_connections": runtime_deps.connections.capacity,
        "providers": runtime_deps.registry.names(),
    }


@app.post("/providers/{capability}")
async def change_provider(capability: str, body: ProviderChange, request: Request) -> dict[str, str]:
    runtime_deps = _runtime_deps(request)
    try:
        cap = Capability(capability.strip().lower())
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=f"unknown capability '{capability}'") from exc
    try:
        await runtime_deps.registry.change_provider(cap, body.name)
    except ProviderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ProviderSetupError as exc:
        logger.error("provider change failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"capability": cap.value, "name": runtime_deps.registry.active_name(cap) or body.name}


@app.websocket(WS_ENDPOINT_PATH)
async def websocket_endpoint(websocket: WebSocket) -> None:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    await handle_websocket_connection(websocket, runtime_deps)
