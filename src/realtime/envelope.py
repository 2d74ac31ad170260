"""Outbound side of a client WebSocket: JSON envelopes and audio frames through one writer task."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections import deque
from dataclasses import dataclass
from collections.abc import Callable

from fastapi import WebSocket, WebSocketDisconnect

from src.config.websocket import WS_MSG_ERROR
from src.handlers.websocket.errors import encode_envelope, build_error_payload

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    data: str | bytes
    done: asyncio.Future | None = None

    @property
    def is_audio(self) -> bool:
        return isinstance(self.data, bytes)


class ClientChannel:
    """Serializes every client-visible write for one connection.

    Callers never await the socket: frames are queued and written in order by a
    single task. A failed write closes the channel and fires ``on_disconnect``.
    """

    def __init__(
        self,
        ws: WebSocket,
        *,
        connection_id: str,
        max_pending: int,
        on_disconnect: Callable[[], None] | None = None,
    ) -> None:
        self._ws = ws
        self._connection_id = connection_id
        self._max_pending = max(1, int(max_pending))
        self._on_disconnect = on_disconnect
        self._pending: deque[_Frame] = deque()
        self._wakeup = asyncio.Event()
        self._writer: asyncio.Task | None = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return not self._closed

    def set_disconnect_callback(self, callback: Callable[[], None]) -> None:
        self._on_disconnect = callback

    def send_json(self, msg_type: str, payload: Any = None, **extra: Any) -> bool:
        return self._enqueue(_Frame(encode_envelope(msg_type, payload, **extra)))

    def send_error(self, message: str, *, details: Any = None, code: str | None = None) -> bool:
        return self.send_json(WS_MSG_ERROR, build_error_payload(message, details=details, code=code))

    def send_bytes(self, data: bytes) -> bool:
        if not data:
            return False
        return self._enqueue(_Frame(bytes(data)))

    async def send_and_wait(self, msg_type: str, payload: Any = None, *, timeout_s: float) -> bool:
        """Queue an envelope and wait until it has actually been written."""
        done = asyncio.get_running_loop().create_future()
        if not self._enqueue(_Frame(encode_envelope(msg_type, payload), done)):
            return False
        try:
            return bool(await asyncio.wait_for(done, timeout=timeout_s))
        except TimeoutError:
            return False

    def discard_audio(self) -> int:
        """Drop audio frames that have not been written yet (barge-in)."""
        kept = [frame for frame in self._pending if not frame.is_audio]
        dropped = len(self._pending) - len(kept)
        if dropped:
            self._pending = deque(kept)
            logger.debug("discarded %s queued audio frames connection_id=%s", dropped, self._connection_id)
        return dropped

    def pending_count(self) -> int:
        return len(self._pending)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._release_pending()
        if self._writer is not None and not self._writer.done():
            self._writer.cancel()

    async def aclose(self) -> None:
        self.close()
        writer, self._writer = self._writer, None
        if writer is None:
            return
        try:
            await writer
        except asyncio.CancelledError:
            return

    def _enqueue(self, frame: _Frame) -> bool:
        if self._closed:
            return False
        if len(self._pending) >= self._max_pending:
            logger.warning(
                "outbound queue full (%s frames); dropping frame connection_id=%s",
                self._max_pending,
                self._connection_id,
            )
            return False
        self._pending.append(frame)
        self._ensure_writer()
        self._wakeup.set()
        return True

    def _ensure_writer(self) -> None:
        if self._writer is None or self._writer.done():
            self._writer = asyncio.get_running_loop().create_task(self._writer_loop())

    def _release_pending(self) -> None:
        while self._pending:
            frame = self._pending.popleft()
            if frame.done is not None and not frame.done.done():
                frame.done.set_result(False)

    def _mark_broken(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._release_pending()
        if self._on_disconnect is not None:
            self._on_disconnect()

    async def _write(self, frame: _Frame) -> None:
        if frame.is_audio:
            await self._ws.send_bytes(frame.data)
        else:
            await self._ws.send_text(frame.data)

    async def _writer_loop(self) -> None:
        while not self._closed:
            if not self._pending:
                self._wakeup.clear()
                await self._wakeup.wait()
                continue
            frame = self._pending.popleft()
            try:
                await self._write(frame)
            except WebSocketDisconnect:
                logger.debug("client went away during send connection_id=%s", self._connection_id)
                self._finish(frame, ok=False)
                self._mark_broken()
                return
            except Exception:
                logger.warning("send to client failed connection_id=%s", self._connection_id, exc_info=True)
                self._finish(frame, ok=False)
                self._mark_broken()
                return
            self._finish(frame, ok=True)

    @staticmethod
    def _finish(frame: _Frame, *, ok: bool) -> None:
        if frame.done is not None and not frame.done.done():
            frame.done.set_result(ok)


__all__ = ["ClientChannel"]
