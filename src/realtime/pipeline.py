"""Per-connection component wiring and the single teardown routine."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import TYPE_CHECKING

from src.state.session import ConnectionSession
from src.providers.capability import Capability
from src.providers.registry import ProviderRegistry

from .ingest import AudioIngestPipeline
from .router import RecognitionEventRouter
from .synthesis import SynthesisQueue
from .generation import GenerationStreamCoordinator
from .interruption import InterruptionController

if TYPE_CHECKING:
    from src.handlers.connections import ConnectionRegistry

logger = logging.getLogger(__name__)


class ConversationPipeline:
    """Everything one client connection needs, plus how to take it down.

    ``teardown`` may be triggered by the message loop, the heartbeat monitor or
    a failed send; only the first call does any work.
    """

    def __init__(
        self,
        session: ConnectionSession,
        *,
        registry: ProviderRegistry,
        connections: ConnectionRegistry,
        interruption: InterruptionController,
        synthesis: SynthesisQueue,
        generation: GenerationStreamCoordinator,
        ingest: AudioIngestPipeline,
        clear_on_disconnect: bool,
    ) -> None:
        self.session = session
        self.interruption = interruption
        self.synthesis = synthesis
        self.generation = generation
        self.ingest = ingest
        self.router = RecognitionEventRouter(session, interruption=interruption, generation=generation)
        self._registry = registry
        self._connections = connections
        self._clear_on_disconnect = clear_on_disconnect
        self._torn_down = False
        self._done = asyncio.Event()

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    async def start_recognition(self) -> None:
        recognizer = self._registry.get(Capability.RECOGNITION)
        await recognizer.start_recognition(self.session, self.router)

    async def stop_recognition(self) -> None:
        recognizer = self._registry.get(Capability.RECOGNITION)
        await recognizer.stop_recognition(self.session)

    def request_teardown(self) -> None:
        """Schedule teardown from synchronous code (e.g. a failed send)."""
        if self._torn_down:
            return
        self.session.active = False
        self.session.spawn(self.teardown(), name="teardown")

    async def teardown(self) -> None:
        if self._torn_down:
            # Later callers wait for the first one so the socket outlives cleanup.
            await self._done.wait()
            return
        self._torn_down = True
        try:
            await self._teardown()
        finally:
            self._done.set()

    async def _teardown(self) -> None:
        session = self.session
        session.active = False
        session.channel.close()
        self.interruption.cancel(session, notify_client=False)
        session.cancel_tasks()

        for capability in (Capability.RECOGNITION, Capability.SYNTHESIS, Capability.GENERATION):
            try:
                provider = self._registry.get(capability)
                await provider.cleanup(session)
            except Exception:
                logger.warning(
                    "%s cleanup failed connection_id=%s",
                    capability.value,
                    session.connection_id,
                    exc_info=True,
                )

        if self._clear_on_disconnect:
            session.history.clear()
        with contextlib.suppress(Exception):
            await session.channel.aclose()
        await self._connections.remove(session.connection_id)
        logger.info(
            "connection torn down connection_id=%s active=%s",
            session.connection_id,
            self._connections.count(),
        )


__all__ = ["ConversationPipeline"]
