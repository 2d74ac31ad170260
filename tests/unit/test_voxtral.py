from __future__ import annotations

import asyncio
import base64

import orjson
import pytest

from src.providers.recognition.voxtral_stream import VoxtralStream
from tests.utils.runtime import wait_for, pcm_frame


class _Upstream:
    """Stands in for the websockets client connection; records sent envelopes."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.closed = False

    async def send(self, text: str) -> None:
        self.sent.append(orjson.loads(text))

    async def close(self) -> None:
        self.closed = True


class _Events:
    def __init__(self) -> None:
        self.log: list[tuple[str, object]] = []

    def on_partial(self, text: str) -> None:
        self.log.append(("partial", text))

    def on_final(self, text: str) -> None:
        self.log.append(("final", text))

    def on_session_boundary(self, started: bool) -> None:
        self.log.append(("boundary", started))

    def on_canceled(self, reason: str) -> None:
        self.log.append(("canceled", reason))


def _attached_stream(events: _Events) -> tuple[VoxtralStream, _Upstream]:
    stream = VoxtralStream(
        url="ws://stt.invalid/ws",
        api_key="",
        connection_id="conn-1",
        events=events,
        end_silence_ms=30,
        voice_threshold=300,
        vad_window_samples=50,
    )
    upstream = _Upstream()
    stream._ws = upstream
    stream._accepting = True
    stream._sender = asyncio.create_task(stream._send_loop())
    return stream, upstream


@pytest.mark.asyncio
async def test_endpointing_frames_one_utterance() -> None:
    events = _Events()
    stream, upstream = _attached_stream(events)

    quiet = pcm_frame(0)
    loud = pcm_frame(1000)
    for frame in (quiet, loud, quiet, quiet, quiet):
        assert stream.push(frame) is True
    await wait_for(lambda: len(upstream.sent) == 7)

    types = [msg["type"] for msg in upstream.sent]
    assert types == [
        "input_audio_buffer.commit",
        "input_audio_buffer.append",
        "input_audio_buffer.append",
        "input_audio_buffer.append",
        "input_audio_buffer.append",
        "input_audio_buffer.append",
        "input_audio_buffer.commit",
    ]
    assert upstream.sent[0]["payload"] == {"final": False}
    assert upstream.sent[-1]["payload"] == {"final": True}
    # Pre-roll keeps the quiet frame that preceded speech.
    assert base64.b64decode(upstream.sent[1]["payload"]["audio"]) == quiet
    assert base64.b64decode(upstream.sent[2]["payload"]["audio"]) == loud
    request_ids = {msg["request_id"] for msg in upstream.sent}
    assert len(request_ids) == 1 and None not in request_ids
    assert all(msg["session_id"] == "conn-1" for msg in upstream.sent)
    assert events.log == [("boundary", True)]

    await stream.teardown()


@pytest.mark.asyncio
async def test_server_events_map_to_callbacks() -> None:
    events = _Events()
    stream, _upstream = _attached_stream(events)
    stream._announced = True

    stream._handle({"type": "token", "payload": {"text": "hel"}})
    stream._handle({"type": "token", "payload": {"text": "lo"}})
    stream._handle({"type": "final", "payload": {"normalized_text": " hello "}})
    stream._handle({"type": "done", "payload": {}})
    stream._handle({"type": "usage", "payload": {}})

    assert events.log == [
        ("partial", "hel"),
        ("partial", "hello"),
        ("final", "hello"),
        ("boundary", False),
    ]
    await stream.teardown()


@pytest.mark.asyncio
async def test_server_error_cancels_utterance() -> None:
    events = _Events()
    stream, _upstream = _attached_stream(events)
    stream._announced = True

    stream._handle({"type": "error", "payload": {"code": "overloaded", "message": "busy"}})

    assert events.log == [("canceled", "busy"), ("boundary", False)]
    await stream.teardown()


@pytest.mark.asyncio
async def test_stop_closes_open_utterance_and_connection() -> None:
    events = _Events()
    stream, upstream = _attached_stream(events)
    stream.push(pcm_frame(1000))
    await wait_for(lambda: len(upstream.sent) == 2)

    # The final commit is sent; no server answers, so stop runs into its deadline.
    await stream.stop(timeout_s=0.05)

    assert upstream.sent[-1]["payload"] == {"final": True}
    assert upstream.closed is True
    assert stream.is_open is False
    assert stream.push(pcm_frame(1000)) is False
    assert events.log == [("boundary", True), ("boundary", False)]
