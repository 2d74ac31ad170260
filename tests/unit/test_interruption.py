from __future__ import annotations

import asyncio

import pytest

from src.config.websocket import WS_MSG_INTERRUPTED
from tests.utils.runtime import settle, wait_for, build_pipeline


@pytest.mark.asyncio
async def test_cancel_on_idle_session_is_idempotent() -> None:
    pipeline, ws, _providers = await build_pipeline()
    session = pipeline.session

    pipeline.interruption.cancel(session, notify_client=True)
    pipeline.interruption.cancel(session, notify_client=True)
    await settle()

    assert len(ws.messages(WS_MSG_INTERRUPTED)) == 1
    assert session.generation_handle is None
    assert session.processing is False


@pytest.mark.asyncio
async def test_silent_cancel_sends_nothing() -> None:
    pipeline, ws, _providers = await build_pipeline()
    pipeline.interruption.cancel(pipeline.session, notify_client=False)
    await settle()
    assert ws.messages() == []


@pytest.mark.asyncio
async def test_cancel_tears_down_generation_and_synthesis() -> None:
    pipeline, ws, providers = await build_pipeline()
    session = pipeline.session
    gate = asyncio.Event()
    stream = providers.generation.queue_reply(["First. ", "Second."], gate=gate)
    providers.synthesis.gate = asyncio.Event()

    task = session.spawn(pipeline.generation.process_input("talk", session), name="generation")
    await wait_for(lambda: providers.synthesis.in_flight == 1)
    handle = session.generation_handle
    assert handle is not None
    assert session.processing is True

    pipeline.interruption.cancel(session, notify_client=True)
    await settle()

    assert handle.cancelled is True
    assert stream.closed is True
    assert session.generation_handle is None
    assert session.synthesis_task is None
    assert session.synthesis_handle is None
    assert list(session.pending_sentences) == []
    assert session.processing is False
    assert providers.synthesis.cancelled == 1
    assert ws.audio() == []
    assert len(ws.messages(WS_MSG_INTERRUPTED)) == 1

    gate.set()
    assert await task == "First. "
    # A superseded reply is not committed.
    assert [m["role"] for m in session.history.as_messages()] == ["system", "user"]


@pytest.mark.asyncio
async def test_cancel_drops_queued_audio_but_keeps_json() -> None:
    pipeline, ws, _providers = await build_pipeline()
    session = pipeline.session

    session.channel.send_json("llmResponse", "partial")
    session.channel.send_bytes(b"\x00\x01")
    pipeline.interruption.cancel(session, notify_client=False)
    await settle()

    assert ws.audio() == []
    assert ws.types() == ["llmResponse"]


@pytest.mark.asyncio
async def test_new_work_rearms_notification() -> None:
    pipeline, ws, providers = await build_pipeline()
    session = pipeline.session

    pipeline.interruption.cancel(session, notify_client=True)
    providers.generation.queue_reply(["ok."])
    await pipeline.generation.process_input("again", session)
    pipeline.interruption.cancel(session, notify_client=True)
    await settle()

    assert len(ws.messages(WS_MSG_INTERRUPTED)) == 2
