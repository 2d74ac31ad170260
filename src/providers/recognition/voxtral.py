"""Recognition provider backed by a Voxtral realtime STT server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.errors import RecognitionError
from src.config.providers import RECOGNITION_VOXTRAL
from src.providers.base.recognition import RecognitionProvider

from .voxtral_stream import VoxtralStream

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.state.session import ConnectionSession
    from src.providers.base.events import RecognitionEvents

logger = logging.getLogger(__name__)


class VoxtralRecognitionProvider(RecognitionProvider):
    name = RECOGNITION_VOXTRAL

    def __init__(self) -> None:
        self._settings: AppSettings | None = None

    async def initialize(self, settings: AppSettings) -> None:
        self._settings = settings
        if not settings.voxtral.api_key:
            logger.warning("VOXTRAL_API_KEY is not set; connecting to %s without credentials", settings.voxtral.url)

    def process_audio_data(self, frame: bytes, session: ConnectionSession) -> bool:
        stream = session.recognition_handle
        if not isinstance(stream, VoxtralStream):
            return False
        return stream.push(frame)

    async def start_recognition(self, session: ConnectionSession, events: RecognitionEvents) -> None:
        if self._settings is None:
            raise RecognitionError("voxtral provider is not initialized")
        existing = session.recognition_handle
        if isinstance(existing, VoxtralStream) and existing.is_open:
            return

        settings = self._settings
        stream = VoxtralStream(
            url=settings.voxtral.url,
            api_key=settings.voxtral.api_key,
            connection_id=session.connection_id,
            events=events,
            end_silence_ms=settings.voxtral.end_silence_ms,
            voice_threshold=settings.audio.voice_detection_threshold,
            vad_window_samples=settings.audio.vad_window_samples,
        )
        try:
            await stream.open(timeout_s=settings.limits.recognition_start_timeout_s)
        except TimeoutError as exc:
            await stream.teardown()
            raise RecognitionError("speech recognition startup timeout") from exc
        except Exception as exc:
            await stream.teardown()
            raise RecognitionError(f"could not reach recognition server: {exc}") from exc
        session.recognition_handle = stream

    async def stop_recognition(self, session: ConnectionSession) -> None:
        stream = session.recognition_handle
        session.recognition_handle = None
        if not isinstance(stream, VoxtralStream):
            return
        timeout_s = self._settings.limits.recognition_stop_timeout_s if self._settings else 3.0
        await stream.stop(timeout_s=timeout_s)


__all__ = ["VoxtralRecognitionProvider"]
