"""Routes recognizer callbacks for one connection to the client and to generation."""

from __future__ import annotations

import logging

from src.state.session import ConnectionSession
from src.config.websocket import WS_MSG_TRANSCRIPTION, WS_MSG_PARTIAL_TRANSCRIPTION

from .generation import GenerationStreamCoordinator
from .interruption import InterruptionController

logger = logging.getLogger(__name__)


class RecognitionEventRouter:
    """Recognition event handlers bound to a single session at setup time."""

    def __init__(
        self,
        session: ConnectionSession,
        *,
        interruption: InterruptionController,
        generation: GenerationStreamCoordinator,
    ) -> None:
        self._session = session
        self._interruption = interruption
        self._generation = generation

    @property
    def session(self) -> ConnectionSession:
        return self._session

    def on_partial(self, text: str) -> None:
        session = self._session
        if not text or not session.active:
            return
        logger.debug("recognizing %r connection_id=%s", text, session.connection_id)
        self._interruption.cancel(session, notify_client=True)
        session.channel.send_json(WS_MSG_PARTIAL_TRANSCRIPTION, text)

    def on_final(self, text: str) -> None:
        session = self._session
        if not text or not text.strip():
            logger.debug("recognition completed with no text connection_id=%s", session.connection_id)
            return
        if not session.active:
            return
        logger.info("recognized %r connection_id=%s", text, session.connection_id)
        self._interruption.cancel(session, notify_client=True)
        session.channel.send_json(WS_MSG_TRANSCRIPTION, text)
        session.spawn(self._generation.process_input(text, session), name="generation")

    def on_session_boundary(self, started: bool) -> None:
        session = self._session
        session.speaking = bool(started)
        logger.info(
            "recognition session %s connection_id=%s",
            "started" if started else "stopped",
            session.connection_id,
        )

    def on_canceled(self, reason: str) -> None:
        logger.error("recognition canceled connection_id=%s: %s", self._session.connection_id, reason)


__all__ = ["RecognitionEventRouter"]
