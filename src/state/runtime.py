"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.realtime.bridge import RealtimeBridge
    from src.providers.registry import ProviderRegistry
    from src.handlers.connections import ConnectionRegistry


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionRegistry
    registry: ProviderRegistry
    bridge: RealtimeBridge
    settings: AppSettings

    async def shutdown(self) -> None:
        try:
            await self.registry.shutdown()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
