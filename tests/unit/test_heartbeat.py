from __future__ import annotations

import time
import asyncio

import pytest

from tests.utils.fakes import FakeWebSocket
from tests.utils.runtime import settle, build_pipeline
from src.handlers.websocket.lifecycle import HeartbeatMonitor
from src.config.websocket import WS_MSG_HEARTBEAT, WS_CLOSE_HEARTBEAT_CODE, WS_CLOSE_HEARTBEAT_REASON


@pytest.mark.asyncio
async def test_healthy_probe_is_written() -> None:
    pipeline, ws, _ = await build_pipeline()
    monitor = HeartbeatMonitor(ws, pipeline.session, on_timeout=pipeline.teardown, interval_s=0.5, grace_s=1.0)

    assert await monitor.check() is True
    assert ws.types() == [WS_MSG_HEARTBEAT]
    assert ws.close_code is None


@pytest.mark.asyncio
async def test_two_failed_probes_tear_down_once() -> None:
    ws = FakeWebSocket(fail_sends=True)
    pipeline, _, providers = await build_pipeline(ws=ws)
    await pipeline.start_recognition()
    monitor = HeartbeatMonitor(ws, pipeline.session, on_timeout=pipeline.teardown, interval_s=0.5, grace_s=1.0)

    assert await monitor.check() is False
    assert await monitor.check() is False
    await settle()

    assert ws.close_code == WS_CLOSE_HEARTBEAT_CODE
    assert ws.close_reason == WS_CLOSE_HEARTBEAT_REASON
    assert providers.recognition.cleanups == 1
    assert pipeline.torn_down is True
    assert pipeline.session.active is False


@pytest.mark.asyncio
async def test_inbound_silence_past_grace_closes_connection() -> None:
    pipeline, ws, providers = await build_pipeline()
    monitor = HeartbeatMonitor(ws, pipeline.session, on_timeout=pipeline.teardown, interval_s=0.5, grace_s=0.5)
    pipeline.session.last_inbound_at = time.monotonic() - 10.0

    assert await monitor.check() is False
    assert ws.close_code == WS_CLOSE_HEARTBEAT_CODE
    assert providers.recognition.cleanups == 1


@pytest.mark.asyncio
async def test_zero_grace_disables_inbound_check() -> None:
    pipeline, ws, _ = await build_pipeline()
    monitor = HeartbeatMonitor(ws, pipeline.session, on_timeout=pipeline.teardown, interval_s=0.5, grace_s=0.0)
    pipeline.session.last_inbound_at = time.monotonic() - 10.0

    assert await monitor.check() is True
    assert ws.close_code is None


@pytest.mark.asyncio
async def test_monitor_loop_probes_until_stopped() -> None:
    pipeline, ws, _ = await build_pipeline()
    monitor = HeartbeatMonitor(ws, pipeline.session, on_timeout=pipeline.teardown, interval_s=0.01, grace_s=0.0)
    monitor.start()

    await asyncio.sleep(0.05)
    await monitor.stop()

    assert len(ws.messages(WS_MSG_HEARTBEAT)) >= 2
    assert monitor.fired is False
