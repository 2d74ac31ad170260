"""Synthesis capability interface."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.state.session import ConnectionSession


class SynthesisProvider(ABC):
    """Text-to-speech backend.

    Subclasses implement ``synthesize``; the in-flight request for a session is
    tracked on ``session.synthesis_handle`` so it can be cancelled from outside.
    """

    name: str = ""

    async def initialize(self, settings: AppSettings) -> None:
        return None

    @abstractmethod
    async def synthesize(self, text: str) -> bytes | None: ...

    async def text_to_speech(self, text: str, session: ConnectionSession) -> bytes | None:
        self.cancel_tts(session)
        request = asyncio.ensure_future(self.synthesize(text))
        session.synthesis_handle = request
        try:
            return await request
        finally:
            if session.synthesis_handle is request:
                session.synthesis_handle = None

    def cancel_tts(self, session: ConnectionSession) -> None:
        request = session.synthesis_handle
        session.synthesis_handle = None
        if request is not None and not request.done():
            request.cancel()

    async def cleanup(self, session: ConnectionSession) -> None:
        self.cancel_tts(session)

    async def aclose(self) -> None:
        return None


__all__ = ["SynthesisProvider"]
