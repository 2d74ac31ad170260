"""Builds the per-connection pipeline around shared, stateless components."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import WebSocket

from src.state.settings import AppSettings
from src.state.history import ConversationHistory
from src.providers.registry import ProviderRegistry
from src.state.session import ConnectionSession, new_connection_id

from .envelope import ClientChannel
from .pipeline import ConversationPipeline
from .ingest import AudioIngestPipeline
from .synthesis import SynthesisQueue
from .generation import GenerationStreamCoordinator
from .interruption import InterruptionController

if TYPE_CHECKING:
    from src.handlers.connections import ConnectionRegistry


class RealtimeBridge:
    """Shared per-process components; per-connection state lives in the session."""

    def __init__(self, *, registry: ProviderRegistry, connections: ConnectionRegistry, settings: AppSettings) -> None:
        self._registry = registry
        self._connections = connections
        self._settings = settings
        self.interruption = InterruptionController(registry=registry)
        self.synthesis = SynthesisQueue(registry=registry, timeout_s=settings.limits.synthesis_timeout_s)
        self.generation = GenerationStreamCoordinator(
            registry=registry,
            interruption=self.interruption,
            synthesis=self.synthesis,
        )
        self.ingest = AudioIngestPipeline(
            registry=registry,
            interruption=self.interruption,
            threshold=settings.audio.voice_detection_threshold,
            window_samples=settings.audio.vad_window_samples,
        )

    def new_connection(self, ws: WebSocket, *, connection_id: str | None = None) -> ConversationPipeline:
        connection_id = connection_id or new_connection_id()
        channel = ClientChannel(
            ws,
            connection_id=connection_id,
            max_pending=self._settings.websocket.outbound_queue_max,
        )
        history = ConversationHistory(
            system_prompt=self._settings.conversation.system_prompt,
            max_history=self._settings.conversation.max_history,
        )
        session = ConnectionSession(connection_id=connection_id, channel=channel, history=history)
        pipeline = ConversationPipeline(
            session,
            registry=self._registry,
            connections=self._connections,
            interruption=self.interruption,
            synthesis=self.synthesis,
            generation=self.generation,
            ingest=self.ingest,
            clear_on_disconnect=self._settings.conversation.clear_on_disconnect,
        )
        channel.set_disconnect_callback(pipeline.request_teardown)
        return pipeline


__all__ = ["RealtimeBridge"]
