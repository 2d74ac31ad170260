"""Inbound audio: format gate, barge-in detection and forwarding to recognition."""

from __future__ import annotations

import logging

from src.state.session import ConnectionSession
from src.providers.capability import Capability
from src.providers.registry import ProviderRegistry

from .interruption import InterruptionController
from .vad import is_valid_pcm_frame, detect_voice_activity

logger = logging.getLogger(__name__)


class AudioIngestPipeline:
    def __init__(
        self,
        *,
        registry: ProviderRegistry,
        interruption: InterruptionController,
        threshold: int,
        window_samples: int,
    ) -> None:
        self._registry = registry
        self._interruption = interruption
        self._threshold = int(threshold)
        self._window_samples = int(window_samples)

    def ingest(self, frame: bytes, session: ConnectionSession) -> bool:
        """Gate one inbound frame; returns True only if it reached the recognizer."""
        if not session.active:
            return False
        if not frame or not is_valid_pcm_frame(frame):
            logger.warning(
                "invalid audio format, length=%s connection_id=%s",
                len(frame) if frame else 0,
                session.connection_id,
            )
            return False

        if not session.first_audio_received:
            session.first_audio_received = True
            logger.info("first audio received size=%s bytes connection_id=%s", len(frame), session.connection_id)

        if not session.speaking and detect_voice_activity(
            frame,
            threshold=self._threshold,
            window_samples=self._window_samples,
        ):
            logger.debug("voice activity detected connection_id=%s", session.connection_id)
            session.speaking = True
            self._interruption.cancel(session, notify_client=True)

        if session.recognition_handle is None:
            return False
        recognizer = self._registry.get(Capability.RECOGNITION)
        return recognizer.process_audio_data(frame, session)


__all__ = ["AudioIngestPipeline"]
