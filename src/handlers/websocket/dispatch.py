"""Dispatch handlers for client JSON messages."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from src.errors import RecognitionError
from src.providers.capability import Capability
from src.realtime.pipeline import ConversationPipeline
from src.config.websocket import (
    WS_MSG_PING,
    WS_MSG_PONG,
    WS_ERROR_RECOGNITION,
    WS_MSG_TEXT_INPUT,
    WS_ERROR_INVALID_PAYLOAD,
    WS_MSG_GET_CONVERSATION,
    WS_MSG_START_RECOGNITION,
    WS_MSG_STOP_RECOGNITION,
    WS_MSG_CLEAR_CONVERSATION,
    WS_MSG_RECOGNITION_STARTED,
    WS_MSG_RECOGNITION_STOPPED,
    WS_MSG_CONVERSATION_CLEARED,
    WS_MSG_CONVERSATION_HISTORY,
)

logger = logging.getLogger(__name__)

HandlerFn = Callable[[ConversationPipeline, Any], Awaitable[None]]

RECOGNIZER_SETUP_FAILED = "Failed to set up speech recognizer"


async def _handle_ping(pipeline: ConversationPipeline, _payload: Any) -> None:
    pipeline.session.channel.send_json(WS_MSG_PONG)


async def _handle_pong(_pipeline: ConversationPipeline, _payload: Any) -> None:
    # Liveness only; the message loop already refreshed the inbound timestamp.
    return None


async def _handle_clear_conversation(pipeline: ConversationPipeline, _payload: Any) -> None:
    session = pipeline.session
    pipeline.registry.get(Capability.GENERATION).clear_conversation_history(session)
    session.channel.send_json(WS_MSG_CONVERSATION_CLEARED)


async def _handle_get_conversation(pipeline: ConversationPipeline, _payload: Any) -> None:
    session = pipeline.session
    history = pipeline.registry.get(Capability.GENERATION).get_conversation_history(session)
    session.channel.send_json(WS_MSG_CONVERSATION_HISTORY, history)


async def _handle_text_input(pipeline: ConversationPipeline, payload: Any) -> None:
    session = pipeline.session
    if not isinstance(payload, str) or not payload.strip():
        session.channel.send_error(
            "textInput payload must be a non-empty string",
            code=WS_ERROR_INVALID_PAYLOAD,
        )
        return
    logger.info("text input %r connection_id=%s", payload, session.connection_id)
    session.spawn(pipeline.generation.process_input(payload, session), name="generation")


async def start_recognition(pipeline: ConversationPipeline) -> bool:
    session = pipeline.session
    try:
        await pipeline.start_recognition()
    except RecognitionError as exc:
        logger.error("recognizer setup failed connection_id=%s: %s", session.connection_id, exc)
        session.channel.send_error(RECOGNIZER_SETUP_FAILED, details=str(exc), code=WS_ERROR_RECOGNITION)
        return False
    return True


async def _handle_start_recognition(pipeline: ConversationPipeline, _payload: Any) -> None:
    if await start_recognition(pipeline):
        pipeline.session.channel.send_json(WS_MSG_RECOGNITION_STARTED)


async def _handle_stop_recognition(pipeline: ConversationPipeline, _payload: Any) -> None:
    session = pipeline.session
    try:
        await pipeline.stop_recognition()
    except Exception as exc:
        logger.error("stop recognition failed connection_id=%s: %s", session.connection_id, exc)
        session.channel.send_error("Failed to stop speech recognizer", details=str(exc), code=WS_ERROR_RECOGNITION)
        return
    session.speaking = False
    session.channel.send_json(WS_MSG_RECOGNITION_STOPPED)


HANDLERS: dict[str, HandlerFn] = {
    WS_MSG_PING: _handle_ping,
    WS_MSG_PONG: _handle_pong,
    WS_MSG_TEXT_INPUT: _handle_text_input,
    WS_MSG_GET_CONVERSATION: _handle_get_conversation,
    WS_MSG_START_RECOGNITION: _handle_start_recognition,
    WS_MSG_STOP_RECOGNITION: _handle_stop_recognition,
    WS_MSG_CLEAR_CONVERSATION: _handle_clear_conversation,
}

__all__ = ["HANDLERS", "RECOGNIZER_SETUP_FAILED", "start_recognition"]
