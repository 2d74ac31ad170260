"""One upstream Voxtral realtime STT connection bound to one client session.

The Voxtral server speaks a JSON envelope (``type``/``session_id``/``request_id``/
``payload``) and transcribes one utterance per request: ``commit`` with
``final=false`` opens it, ``append`` carries base64 PCM16, ``commit`` with
``final=true`` closes it. It answers with ``token`` deltas, a ``final`` text and
``done``. Utterance boundaries are found here by amplitude endpointing.
"""

from __future__ import annotations

import uuid
import base64
import asyncio
import logging
import contextlib
from typing import Any
from collections import deque

import orjson
import websockets

from src.realtime.vad import detect_voice_activity
from src.providers.base.events import RecognitionEvents
from src.config.audio import ASR_SAMPLE_RATE_HZ, PCM_SAMPLE_WIDTH_BYTES

logger = logging.getLogger(__name__)

_COMMIT = "input_audio_buffer.commit"
_APPEND = "input_audio_buffer.append"
_PREROLL_FRAMES = 10
_MAX_MESSAGE_BYTES = 4 * 1024 * 1024


def _frame_ms(frame: bytes) -> float:
    return (len(frame) / PCM_SAMPLE_WIDTH_BYTES) * 1000.0 / ASR_SAMPLE_RATE_HZ


class VoxtralStream:
    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        connection_id: str,
        events: RecognitionEvents,
        end_silence_ms: int,
        voice_threshold: int,
        vad_window_samples: int,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._connection_id = connection_id
        self._events = events
        self._end_silence_ms = float(max(0, end_silence_ms))
        self._voice_threshold = int(voice_threshold)
        self._vad_window_samples = int(vad_window_samples)

        self._ws: Any = None
        self._outbox: asyncio.Queue[bytes | None] = asyncio.Queue()
        self._sender: asyncio.Task | None = None
        self._receiver: asyncio.Task | None = None

        self._preroll: deque[bytes] = deque(maxlen=_PREROLL_FRAMES)
        self._request_id: str | None = None
        self._silence_ms = 0.0
        self._partial_text = ""
        self._idle = asyncio.Event()
        self._idle.set()

        self._accepting = False
        self._closed = False
        self._announced = False

    @property
    def is_open(self) -> bool:
        return self._accepting and not self._closed

    async def open(self, *, timeout_s: float) -> None:
        headers = [("X-API-Key", self._api_key)] if self._api_key else []
        self._ws = await asyncio.wait_for(
            websockets.connect(self._url, additional_headers=headers, max_size=_MAX_MESSAGE_BYTES),
            timeout=timeout_s,
        )
        self._accepting = True
        self._receiver = asyncio.create_task(self._receive_loop())
        self._sender = asyncio.create_task(self._send_loop())
        logger.info("voxtral stream opened connection_id=%s", self._connection_id)

    def push(self, frame: bytes) -> bool:
        if not self.is_open:
            return False
        self._outbox.put_nowait(frame)
        return True

    async def stop(self, *, timeout_s: float) -> None:
        """Finish the current utterance if any, then release the connection.

        Overrunning ``timeout_s`` forces the same teardown as the graceful path.
        """
        if self._closed:
            return
        self._accepting = False
        try:
            await asyncio.wait_for(self._drain(), timeout=timeout_s)
        except TimeoutError:
            logger.warning("stop recognition timed out, forcing close connection_id=%s", self._connection_id)
        except Exception:
            logger.warning("stop recognition failed connection_id=%s", self._connection_id, exc_info=True)
        finally:
            await self.teardown()

    async def teardown(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._accepting = False
        for task in (self._sender, self._receiver):
            if task is not None and task is not asyncio.current_task():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError, Exception):
                    await task
        if self._ws is not None:
            with contextlib.suppress(Exception):
                await self._ws.close()
        self._idle.set()
        self._end_utterance()
        logger.info("voxtral stream closed connection_id=%s", self._connection_id)

    async def _drain(self) -> None:
        self._outbox.put_nowait(None)
        if self._sender is not None:
            await self._sender
        await self._idle.wait()

    async def _send(self, msg_type: str, payload: dict[str, Any]) -> None:
        envelope = {
            "type": msg_type,
            "session_id": self._connection_id,
            "request_id": self._request_id,
            "payload": payload,
        }
        await self._ws.send(orjson.dumps(envelope).decode("utf-8"))

    async def _send_audio(self, frame: bytes) -> None:
        await self._send(_APPEND, {"audio": base64.b64encode(frame).decode("ascii")})

    async def _begin_utterance(self) -> None:
        self._request_id = uuid.uuid4().hex
        self._silence_ms = 0.0
        self._partial_text = ""
        self._idle.clear()
        await self._send(_COMMIT, {"final": False})
        if not self._announced:
            self._announced = True
            self._events.on_session_boundary(True)
        while self._preroll:
            await self._send_audio(self._preroll.popleft())

    async def _finish_utterance(self) -> None:
        await self._send(_COMMIT, {"final": True})
        self._request_id = None
        self._silence_ms = 0.0

    async def _send_loop(self) -> None:
        try:
            await self._pump()
        except websockets.exceptions.ConnectionClosed:
            logger.debug("voxtral connection closed while sending connection_id=%s", self._connection_id)
            self._accepting = False
            self._idle.set()

    async def _pump(self) -> None:
        while True:
            frame = await self._outbox.get()
            if frame is None:
                if self._request_id is not None:
                    await self._finish_utterance()
                return

            voiced = detect_voice_activity(
                frame,
                threshold=self._voice_threshold,
                window_samples=self._vad_window_samples,
            )
            if self._request_id is None:
                # Hold frames until the previous utterance is fully answered.
                if not voiced or not self._idle.is_set():
                    self._preroll.append(frame)
                    continue
                self._preroll.append(frame)
                await self._begin_utterance()
                continue

            await self._send_audio(frame)
            self._silence_ms = 0.0 if voiced else self._silence_ms + _frame_ms(frame)
            if self._silence_ms >= self._end_silence_ms:
                await self._finish_utterance()

    async def _receive_loop(self) -> None:
        try:
            async for raw in self._ws:
                try:
                    msg = orjson.loads(raw)
                except orjson.JSONDecodeError:
                    logger.debug("voxtral sent non-JSON frame connection_id=%s", self._connection_id)
                    continue
                if isinstance(msg, dict):
                    self._handle(msg)
        except websockets.exceptions.ConnectionClosed as exc:
            if not self._closed:
                code = exc.rcvd.code if exc.rcvd is not None else None
                self._events.on_canceled(f"recognition server closed the connection (code={code})")
        finally:
            self._accepting = False
            self._idle.set()

    def _handle(self, msg: dict[str, Any]) -> None:
        msg_type = msg.get("type")
        payload = msg.get("payload") or {}
        if msg_type == "token":
            delta = payload.get("text")
            if isinstance(delta, str) and delta:
                self._partial_text += delta
                self._events.on_partial(self._partial_text)
            return
        if msg_type == "final":
            text = payload.get("normalized_text")
            self._partial_text = ""
            self._events.on_final(text.strip() if isinstance(text, str) else "")
            return
        if msg_type == "done":
            self._idle.set()
            self._end_utterance()
            return
        if msg_type == "error":
            self._idle.set()
            self._events.on_canceled(str(payload.get("message") or payload.get("code") or "recognition error"))
            self._end_utterance()
            return
        logger.debug("voxtral event %s ignored connection_id=%s", msg_type, self._connection_id)

    def _end_utterance(self) -> None:
        if self._announced:
            self._announced = False
            self._events.on_session_boundary(False)


__all__ = ["VoxtralStream"]
