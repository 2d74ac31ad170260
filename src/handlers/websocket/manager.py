"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import time
import logging
import contextlib

from fastapi import WebSocket

from src.state.runtime import RuntimeDeps
from src.state.session import new_connection_id
from src.realtime.pipeline import ConversationPipeline
from src.config.websocket import (
    WS_MSG_STATUS,
    WS_MSG_CONNECTED,
    WS_STATUS_READY,
    WS_READY_MESSAGE,
    WS_CLOSE_BUSY_CODE,
    WS_ERROR_SERVER_AT_CAPACITY,
)

from .errors import reject_connection
from .dispatch import start_recognition
from .lifecycle import HeartbeatMonitor
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps, connection_id: str) -> bool:
    if not await runtime_deps.connections.add(connection_id):
        await reject_connection(
            ws,
            error_code=WS_ERROR_SERVER_AT_CAPACITY,
            message="Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.remove(connection_id)
        raise
    return True


async def _greet(pipeline: ConversationPipeline, runtime_deps: RuntimeDeps) -> None:
    session = pipeline.session
    session.channel.send_json(WS_MSG_CONNECTED, {"id": session.connection_id, "timestamp": int(time.time() * 1000)})
    if runtime_deps.settings.providers.recognition_eager_start:
        await start_recognition(pipeline)
    session.channel.send_json(
        WS_MSG_STATUS,
        {"status": WS_STATUS_READY, "message": WS_READY_MESSAGE, "connectionId": session.connection_id},
    )


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    connection_id = new_connection_id()
    if not await _prepare_connection(ws, runtime_deps, connection_id):
        logger.warning("connection rejected, at capacity (%s)", runtime_deps.connections.capacity)
        return

    pipeline: ConversationPipeline | None = None
    heartbeat: HeartbeatMonitor | None = None
    try:
        pipeline = runtime_deps.bridge.new_connection(ws, connection_id=connection_id)
        logger.info(
            "WebSocket connection accepted connection_id=%s. Active: %s",
            connection_id,
            runtime_deps.connections.count(),
        )
        await _greet(pipeline, runtime_deps)

        heartbeat = HeartbeatMonitor(
            ws,
            pipeline.session,
            on_timeout=pipeline.teardown,
            interval_s=runtime_deps.settings.websocket.heartbeat_interval_s,
            grace_s=runtime_deps.settings.websocket.heartbeat_grace_s,
        )
        heartbeat.start()

        await run_message_loop(ws, pipeline)
    finally:
        if pipeline is not None:
            await pipeline.teardown()
        else:
            await runtime_deps.connections.remove(connection_id)
        if heartbeat is not None:
            await heartbeat.stop()
        logger.info(
            "WebSocket connection closed connection_id=%s. Active: %s",
            connection_id,
            runtime_deps.connections.count(),
        )


__all__ = ["handle_websocket_connection"]
