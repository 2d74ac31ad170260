"""Runtime dependency construction (providers + admission control)."""

from __future__ import annotations

import logging

from src.state import RuntimeDeps
from src.state.settings import AppSettings
from src.realtime.bridge import RealtimeBridge
from src.providers.registry import ProviderRegistry
from src.handlers.connections import ConnectionRegistry
from src.providers.catalog import register_builtin_providers

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    registry = register_builtin_providers(ProviderRegistry())
    await registry.initialize(settings)

    connections = ConnectionRegistry(max_connections=settings.limits.max_concurrent_connections)
    bridge = RealtimeBridge(registry=registry, connections=connections, settings=settings)
    logger.info(
        "runtime: providers=%s max_connections=%s",
        registry.names(),
        settings.limits.max_concurrent_connections,
    )

    return RuntimeDeps(
        connections=connections,
        registry=registry,
        bridge=bridge,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
