from __future__ import annotations

import pytest

from src.handlers.connections import ConnectionRegistry


@pytest.mark.asyncio
async def test_admission_respects_capacity() -> None:
    registry = ConnectionRegistry(max_connections=2)

    assert await registry.add("a") is True
    assert await registry.add("b") is True
    assert await registry.add("c") is False
    assert registry.count() == 2

    await registry.remove("a")
    assert await registry.add("c") is True
    assert "c" in registry
    assert "a" not in registry


@pytest.mark.asyncio
async def test_remove_is_idempotent() -> None:
    registry = ConnectionRegistry(max_connections=1)
    await registry.add("a")
    await registry.remove("a")
    await registry.remove("a")
    assert registry.count() == 0
