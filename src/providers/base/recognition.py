"""Recognition capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.state.session import ConnectionSession

    from .events import RecognitionEvents


class RecognitionProvider(ABC):
    """Speech-to-text backend.

    A provider owns one recognition stream per session, stored on
    ``session.recognition_handle``, and reports results through the
    ``RecognitionEvents`` it was started with.
    """

    name: str = ""

    async def initialize(self, settings: AppSettings) -> None:
        return None

    @abstractmethod
    def process_audio_data(self, frame: bytes, session: ConnectionSession) -> bool:
        """Push one PCM16 frame into the session's stream; False if there is none."""

    @abstractmethod
    async def start_recognition(self, session: ConnectionSession, events: RecognitionEvents) -> None: ...

    @abstractmethod
    async def stop_recognition(self, session: ConnectionSession) -> None: ...

    async def cleanup(self, session: ConnectionSession) -> None:
        await self.stop_recognition(session)

    async def aclose(self) -> None:
        return None


__all__ = ["RecognitionProvider"]
