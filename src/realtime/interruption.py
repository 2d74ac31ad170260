"""Barge-in: tear down in-flight generation and synthesis for one connection."""

from __future__ import annotations

import logging

from src.state.session import ConnectionSession
from src.config.websocket import WS_MSG_INTERRUPTED
from src.providers.capability import Capability
from src.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class InterruptionController:
    def __init__(self, *, registry: ProviderRegistry) -> None:
        self._registry = registry

    def cancel(self, session: ConnectionSession, *, notify_client: bool) -> None:
        """Cancel generation, stop synthesis, drain queued sentences and audio.

        Synchronous and idempotent. At most one ``interrupted`` message is sent
        until new work re-arms the session.
        """
        session.generation_turn += 1
        handle = session.generation_handle
        if handle is not None:
            session.generation_handle = None
            handle.cancel()
            logger.debug("generation cancelled connection_id=%s", session.connection_id)

        if session.synthesis_handle is not None or session.synthesis_task is not None:
            self._cancel_synthesis(session)
        session.pending_sentences.clear()
        session.processing = False
        session.channel.discard_audio()

        if not notify_client or not session.active or session.interrupt_notified:
            return
        session.interrupt_notified = True
        session.channel.send_json(WS_MSG_INTERRUPTED)
        logger.info("interrupted connection_id=%s", session.connection_id)

    def _cancel_synthesis(self, session: ConnectionSession) -> None:
        try:
            self._registry.get(Capability.SYNTHESIS).cancel_tts(session)
        except Exception:
            logger.debug("cancel_tts failed connection_id=%s", session.connection_id, exc_info=True)
        task = session.synthesis_task
        session.synthesis_task = None
        session.synthesis_handle = None
        if task is not None and not task.done():
            task.cancel()


__all__ = ["InterruptionController"]
