"""WebSocket receive loop: binary frames to audio ingest, text frames to dispatch."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from src.realtime.pipeline import ConversationPipeline
from src.config.websocket import WS_KEY_TYPE, WS_KEY_PAYLOAD, WS_ERROR_INVALID_MESSAGE

from .dispatch import HANDLERS
from .parser import parse_client_message

logger = logging.getLogger(__name__)


def _parse_or_send_error(pipeline: ConversationPipeline, raw: str) -> dict[str, Any] | None:
    try:
        return parse_client_message(raw)
    except ValueError as exc:
        logger.warning("invalid client message connection_id=%s: %s", pipeline.session.connection_id, exc)
        pipeline.session.channel.send_error("Invalid message", details=str(exc), code=WS_ERROR_INVALID_MESSAGE)
        return None


async def handle_text_frame(pipeline: ConversationPipeline, raw: str) -> None:
    msg = _parse_or_send_error(pipeline, raw)
    if msg is None:
        return
    msg_type = msg[WS_KEY_TYPE]
    handler = HANDLERS.get(msg_type)
    if handler is None:
        logger.info("unknown message type %r ignored connection_id=%s", msg_type, pipeline.session.connection_id)
        return
    await handler(pipeline, msg.get(WS_KEY_PAYLOAD))


async def run_message_loop(ws: WebSocket, pipeline: ConversationPipeline) -> None:
    session = pipeline.session
    try:
        while session.active:
            message = await ws.receive()
            if message.get("type") == "websocket.disconnect":
                logger.info(
                    "client disconnected code=%s connection_id=%s",
                    message.get("code"),
                    session.connection_id,
                )
                return

            session.touch()
            data = message.get("bytes")
            if data is not None:
                pipeline.ingest.ingest(data, session)
                continue
            text = message.get("text")
            if text is not None:
                await handle_text_frame(pipeline, text)
    except WebSocketDisconnect:
        return


__all__ = ["handle_text_frame", "run_message_loop"]
