"""Envelope and error helpers for the client WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from src.config.websocket import WS_KEY_TYPE, WS_MSG_ERROR, WS_KEY_PAYLOAD

logger = logging.getLogger(__name__)


def build_error_payload(
    message: str,
    *,
    details: Any = None,
    code: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"message": message, "details": details if details is not None else ""}
    if code:
        payload["code"] = code
    return payload


def build_envelope(msg_type: str, payload: Any = None, **extra: Any) -> dict[str, Any]:
    envelope: dict[str, Any] = {WS_KEY_TYPE: msg_type}
    if payload is not None:
        envelope[WS_KEY_PAYLOAD] = payload
    envelope.update(extra)
    return envelope


def encode_envelope(msg_type: str, payload: Any = None, **extra: Any) -> str:
    return orjson.dumps(build_envelope(msg_type, payload, **extra)).decode("utf-8")


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await safe_send_text(ws, encode_envelope(WS_MSG_ERROR, build_error_payload(message, code=error_code)))
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "build_error_payload",
    "build_envelope",
    "encode_envelope",
    "safe_send_text",
    "reject_connection",
]
