"""Client message parsing/validation for the JSON text frames."""

from __future__ import annotations

from typing import Any

import orjson

from src.config.websocket import WS_KEY_TYPE


def parse_client_message(raw: str | bytes) -> dict[str, Any]:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("message missing non-empty 'type'")

    # Normalize
    msg[WS_KEY_TYPE] = msg_type.strip()
    return msg


__all__ = ["parse_client_message"]
