from __future__ import annotations

import pytest

from tests.utils.runtime import settle
from tests.utils.fakes import FakeWebSocket
from src.realtime.envelope import ClientChannel


@pytest.mark.asyncio
async def test_frames_are_written_in_order() -> None:
    ws = FakeWebSocket()
    channel = ClientChannel(ws, connection_id="c1", max_pending=16)

    channel.send_json("connected", {"id": "c1"})
    channel.send_bytes(b"\x01\x02")
    channel.send_json("llmResponse", "hi", extra=True)
    await settle()

    assert ws.sent == [
        ("text", {"type": "connected", "payload": {"id": "c1"}}),
        ("bytes", b"\x01\x02"),
        ("text", {"type": "llmResponse", "payload": "hi", "extra": True}),
    ]
    await channel.aclose()


@pytest.mark.asyncio
async def test_error_payload_shape() -> None:
    ws = FakeWebSocket()
    channel = ClientChannel(ws, connection_id="c1", max_pending=16)

    channel.send_error("TTS processing error", details="boom", code="synthesis_error")
    await settle()

    assert ws.messages("error")[0]["payload"] == {
        "message": "TTS processing error",
        "details": "boom",
        "code": "synthesis_error",
    }


@pytest.mark.asyncio
async def test_full_queue_drops_new_frames() -> None:
    ws = FakeWebSocket()
    channel = ClientChannel(ws, connection_id="c1", max_pending=2)

    assert channel.send_json("a") is True
    assert channel.send_json("b") is True
    assert channel.send_json("c") is False
    await settle()

    assert ws.types() == ["a", "b"]


@pytest.mark.asyncio
async def test_send_and_wait_reports_write_outcome() -> None:
    ok = ClientChannel(FakeWebSocket(), connection_id="ok", max_pending=4)
    assert await ok.send_and_wait("heartbeat", timeout_s=1.0) is True

    broken_ws = FakeWebSocket(fail_sends=True)
    disconnects: list[str] = []
    broken = ClientChannel(
        broken_ws,
        connection_id="broken",
        max_pending=4,
        on_disconnect=lambda: disconnects.append("gone"),
    )
    assert await broken.send_and_wait("heartbeat", timeout_s=1.0) is False
    assert broken.is_open is False
    assert disconnects == ["gone"]
    assert broken.send_json("later") is False


@pytest.mark.asyncio
async def test_closed_channel_refuses_writes() -> None:
    ws = FakeWebSocket()
    channel = ClientChannel(ws, connection_id="c1", max_pending=4)
    channel.send_json("queued")
    channel.close()
    await settle()

    assert channel.send_bytes(b"\x00\x00") is False
    assert ws.sent == []


@pytest.mark.asyncio
async def test_discard_audio_keeps_json_frames() -> None:
    ws = FakeWebSocket()
    channel = ClientChannel(ws, connection_id="c1", max_pending=8)
    channel.send_bytes(b"\x00\x01")
    channel.send_json("interrupted")
    channel.send_bytes(b"\x00\x02")

    assert channel.discard_audio() == 2
    assert channel.pending_count() == 1
    await settle()
    assert ws.types() == ["interrupted"]
    assert ws.audio() == []
