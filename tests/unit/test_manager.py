from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from src.state.runtime import RuntimeDeps
from src.state.settings import LimitsSettings
from src.realtime.bridge import RealtimeBridge
from src.handlers.connections import ConnectionRegistry
from src.handlers.websocket.manager import handle_websocket_connection
from src.config.websocket import (
    WS_MSG_PONG,
    WS_MSG_ERROR,
    WS_MSG_STATUS,
    WS_STATUS_READY,
    WS_MSG_CONNECTED,
    WS_CLOSE_BUSY_CODE,
    WS_ERROR_SERVER_AT_CAPACITY,
)
from tests.utils.fakes import FakeWebSocket
from tests.utils.runtime import Providers, settle, wait_for, make_settings, build_registry


async def _runtime(settings=None, providers: Providers | None = None) -> tuple[RuntimeDeps, Providers]:
    settings = settings or make_settings()
    providers = providers or Providers()
    registry = await build_registry(settings, providers)
    connections = ConnectionRegistry(max_connections=settings.limits.max_concurrent_connections)
    bridge = RealtimeBridge(registry=registry, connections=connections, settings=settings)
    return RuntimeDeps(connections=connections, registry=registry, bridge=bridge, settings=settings), providers


@pytest.mark.asyncio
async def test_connection_lifecycle() -> None:
    deps, providers = await _runtime()
    ws = FakeWebSocket()
    task = asyncio.create_task(handle_websocket_connection(ws, deps))

    await wait_for(lambda: WS_MSG_STATUS in ws.types())
    assert ws.accepted is True
    assert ws.types()[:2] == [WS_MSG_CONNECTED, WS_MSG_STATUS]
    connected = ws.messages(WS_MSG_CONNECTED)[0]["payload"]
    status = ws.messages(WS_MSG_STATUS)[0]["payload"]
    assert status["status"] == WS_STATUS_READY
    assert status["connectionId"] == connected["id"]
    assert isinstance(connected["timestamp"], int)
    assert providers.recognition.starts == 1
    assert deps.connections.count() == 1

    ws.feed_text({"type": "ping"})
    await wait_for(lambda: WS_MSG_PONG in ws.types())

    ws.disconnect()
    await asyncio.wait_for(task, timeout=1.0)

    assert deps.connections.count() == 0
    assert providers.recognition.cleanups == 1


@pytest.mark.asyncio
async def test_lazy_recognition_start() -> None:
    settings = make_settings()
    settings = replace(settings, providers=replace(settings.providers, recognition_eager_start=False))
    deps, providers = await _runtime(settings)
    ws = FakeWebSocket()
    task = asyncio.create_task(handle_websocket_connection(ws, deps))

    await wait_for(lambda: WS_MSG_STATUS in ws.types())
    assert providers.recognition.starts == 0

    ws.disconnect()
    await asyncio.wait_for(task, timeout=1.0)


@pytest.mark.asyncio
async def test_rejects_when_at_capacity() -> None:
    settings = make_settings(
        limits=LimitsSettings(
            max_concurrent_connections=1,
            recognition_start_timeout_s=1.0,
            recognition_stop_timeout_s=1.0,
            synthesis_timeout_s=1.0,
        )
    )
    deps, providers = await _runtime(settings)
    await deps.connections.add("existing")
    ws = FakeWebSocket()

    await handle_websocket_connection(ws, deps)
    await settle()

    assert ws.close_code == WS_CLOSE_BUSY_CODE
    assert ws.types() == [WS_MSG_ERROR]
    assert ws.messages(WS_MSG_ERROR)[0]["payload"]["code"] == WS_ERROR_SERVER_AT_CAPACITY
    assert deps.connections.count() == 1
    assert providers.recognition.starts == 0


@pytest.mark.asyncio
async def test_binary_frames_reach_recognizer() -> None:
    deps, providers = await _runtime()
    ws = FakeWebSocket()
    task = asyncio.create_task(handle_websocket_connection(ws, deps))
    await wait_for(lambda: WS_MSG_STATUS in ws.types())

    ws.feed_bytes(b"\x00\x00" * 160)
    await wait_for(lambda: len(providers.recognition.frames) == 1)

    ws.disconnect()
    await asyncio.wait_for(task, timeout=1.0)
