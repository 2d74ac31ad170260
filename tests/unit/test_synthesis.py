from __future__ import annotations

import asyncio

import pytest

from src.config.websocket import WS_MSG_ERROR
from src.state.settings import LimitsSettings
from src.providers.capability import Capability
from tests.utils.fakes import FakeSynthesisProvider
from tests.utils.runtime import Providers, settle, wait_for, make_settings, build_pipeline


@pytest.mark.asyncio
async def test_sentences_are_voiced_in_order_one_at_a_time() -> None:
    providers = Providers()
    providers.synthesis.delay_s = 0.002
    pipeline, ws, _ = await build_pipeline(providers=providers)
    sentences = [f"Sentence {i}." for i in range(5)]

    for sentence in sentences:
        pipeline.synthesis.enqueue(pipeline.session, sentence)
    await wait_for(lambda: len(ws.audio()) == 5)

    assert providers.synthesis.calls == sentences
    assert providers.synthesis.max_in_flight == 1
    assert ws.audio() == [f"audio:{s}".encode() for s in sentences]
    await wait_for(lambda: pipeline.session.processing is False)
    assert list(pipeline.session.pending_sentences) == []


@pytest.mark.asyncio
async def test_failure_clears_queue_and_reports_once() -> None:
    providers = Providers()
    providers.synthesis.fail_on = "bad"
    pipeline, ws, _ = await build_pipeline(providers=providers)

    for sentence in ["ok.", "bad.", "never."]:
        pipeline.synthesis.enqueue(pipeline.session, sentence)
    await wait_for(lambda: len(ws.messages(WS_MSG_ERROR)) == 1)
    await settle()

    assert providers.synthesis.calls == ["ok.", "bad."]
    assert ws.audio() == [b"audio:ok."]
    error = ws.messages(WS_MSG_ERROR)[0]["payload"]
    assert error["message"] == "TTS processing error"
    assert list(pipeline.session.pending_sentences) == []
    assert pipeline.session.processing is False


@pytest.mark.asyncio
async def test_timeout_cancels_call_and_reports_error() -> None:
    providers = Providers()
    providers.synthesis.gate = asyncio.Event()
    settings = make_settings(
        limits=LimitsSettings(
            max_concurrent_connections=4,
            recognition_start_timeout_s=1.0,
            recognition_stop_timeout_s=1.0,
            synthesis_timeout_s=0.05,
        )
    )
    pipeline, ws, _ = await build_pipeline(settings, providers)

    pipeline.synthesis.enqueue(pipeline.session, "slow.")
    pipeline.synthesis.enqueue(pipeline.session, "next.")
    await wait_for(lambda: len(ws.messages(WS_MSG_ERROR)) == 1)
    await settle()

    assert providers.synthesis.cancelled == 1
    assert providers.synthesis.calls == ["slow."]
    assert pipeline.session.processing is False
    assert pipeline.session.synthesis_handle is None


@pytest.mark.asyncio
async def test_queue_recovers_after_failure() -> None:
    providers = Providers()
    providers.synthesis.fail_on = "bad"
    pipeline, ws, _ = await build_pipeline(providers=providers)

    pipeline.synthesis.enqueue(pipeline.session, "bad.")
    await wait_for(lambda: len(ws.messages(WS_MSG_ERROR)) == 1)
    await wait_for(lambda: pipeline.session.synthesis_task is None)

    pipeline.synthesis.enqueue(pipeline.session, "good.")
    await wait_for(lambda: len(ws.audio()) == 1)
    assert ws.audio() == [b"audio:good."]


@pytest.mark.asyncio
async def test_empty_audio_is_skipped() -> None:
    providers = Providers()
    pipeline, ws, _ = await build_pipeline(providers=providers)
    original = providers.synthesis.synthesize

    async def sometimes_silent(text: str) -> bytes | None:
        if text == "silent.":
            return b""
        return await original(text)

    providers.synthesis.synthesize = sometimes_silent
    for sentence in ["silent.", "loud."]:
        pipeline.synthesis.enqueue(pipeline.session, sentence)
    await wait_for(lambda: len(ws.audio()) == 1)

    assert ws.audio() == [b"audio:loud."]
    assert ws.messages(WS_MSG_ERROR) == []


@pytest.mark.asyncio
async def test_enqueue_on_inactive_session_is_ignored() -> None:
    pipeline, _ws, providers = await build_pipeline()
    pipeline.session.active = False
    pipeline.synthesis.enqueue(pipeline.session, "late.")
    await settle()
    assert providers.synthesis.calls == []
    assert pipeline.session.processing is False


@pytest.mark.asyncio
async def test_provider_swap_mid_burst_applies_from_next_sentence() -> None:
    providers = Providers()
    gate = asyncio.Event()
    providers.synthesis.gate = gate
    pipeline, ws, _ = await build_pipeline(providers=providers)
    replacement = FakeSynthesisProvider()
    pipeline.registry.register(Capability.SYNTHESIS, "other", lambda: replacement)

    for sentence in ["First.", "Second.", "Third."]:
        pipeline.synthesis.enqueue(pipeline.session, sentence)
    await wait_for(lambda: providers.synthesis.in_flight == 1)

    await pipeline.registry.change_provider(Capability.SYNTHESIS, "other")
    assert providers.synthesis.closed is False
    gate.set()
    await wait_for(lambda: len(ws.audio()) == 3)

    # The call in flight finishes on the instance it started with.
    assert providers.synthesis.calls == ["First."]
    assert replacement.calls == ["Second.", "Third."]
    assert ws.audio() == [b"audio:First.", b"audio:Second.", b"audio:Third."]
    assert ws.messages(WS_MSG_ERROR) == []
