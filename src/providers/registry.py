"""Named provider variants per capability, with one active instance each."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable

from src.state.settings import AppSettings
from src.errors import ProviderSetupError, ProviderNotFoundError

from .capability import Capability

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], Any]

MAX_RETIRED_PROVIDERS = 4


class ProviderRegistry:
    """Resolves capabilities to live provider instances.

    ``get`` must be called per use: ``change_provider`` swaps the active
    instance by reference at any time. Calls already running keep the instance
    they started with. Replaced instances are kept open for those calls, up to
    ``max_retired`` of them; older ones are closed as newer swaps push them out,
    and the rest on ``shutdown``.
    """

    def __init__(self, *, max_retired: int = MAX_RETIRED_PROVIDERS) -> None:
        self._factories: dict[Capability, dict[str, ProviderFactory]] = {cap: {} for cap in Capability}
        self._active: dict[Capability, Any] = {}
        self._active_names: dict[Capability, str] = {}
        self._retired: list[Any] = []
        self._max_retired = max(0, int(max_retired))
        self._settings: AppSettings | None = None
        self._swap_lock = asyncio.Lock()

    def register(self, capability: Capability, name: str, factory: ProviderFactory) -> None:
        key = name.strip().lower()
        if not key:
            raise ValueError("provider name must be non-empty")
        self._factories[capability][key] = factory

    def available(self, capability: Capability) -> list[str]:
        return sorted(self._factories[capability])

    async def initialize(self, settings: AppSettings) -> None:
        self._settings = settings
        configured = {
            Capability.RECOGNITION: settings.providers.recognition,
            Capability.SYNTHESIS: settings.providers.synthesis,
            Capability.GENERATION: settings.providers.generation,
        }
        for capability, name in configured.items():
            provider = await self._build(capability, name)
            self._active[capability] = provider
            self._active_names[capability] = name.strip().lower()
            logger.info("provider %s=%s ready", capability.value, self._active_names[capability])

    def get(self, capability: Capability) -> Any:
        provider = self._active.get(capability)
        if provider is None:
            raise ProviderNotFoundError(capability=capability.value, name="<unset>")
        return provider

    def active_name(self, capability: Capability) -> str | None:
        return self._active_names.get(capability)

    def names(self) -> dict[str, str]:
        return {cap.value: name for cap, name in self._active_names.items()}

    async def change_provider(self, capability: Capability, name: str) -> Any:
        async with self._swap_lock:
            provider = await self._build(capability, name)
            previous = self._active.get(capability)
            self._active[capability] = provider
            self._active_names[capability] = name.strip().lower()
            if previous is not None and previous is not provider:
                self._retired.append(previous)
            logger.info("provider %s switched to %s", capability.value, self._active_names[capability])
            while len(self._retired) > self._max_retired:
                oldest = self._retired.pop(0)
                if not any(oldest is live for live in self._active.values()):
                    await self._close(oldest)
            return provider

    async def shutdown(self) -> None:
        instances = [*self._active.values(), *self._retired]
        self._active.clear()
        self._active_names.clear()
        self._retired.clear()
        for provider in instances:
            await self._close(provider)

    @staticmethod
    async def _close(provider: Any) -> None:
        try:
            await provider.aclose()
        except Exception:
            logger.exception("provider %s shutdown failed", type(provider).__name__)

    async def _build(self, capability: Capability, name: str) -> Any:
        key = (name or "").strip().lower()
        factory = self._factories[capability].get(key)
        if factory is None:
            raise ProviderNotFoundError(capability=capability.value, name=key)
        if self._settings is None:
            raise ProviderSetupError(capability=capability.value, name=key, reason="registry is not initialized")
        try:
            provider = factory()
            await provider.initialize(self._settings)
        except Exception as exc:
            raise ProviderSetupError(capability=capability.value, name=key, reason=str(exc)) from exc
        return provider


__all__ = ["MAX_RETIRED_PROVIDERS", "ProviderFactory", "ProviderRegistry"]
