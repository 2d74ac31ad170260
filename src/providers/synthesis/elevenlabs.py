"""Synthesis provider backed by the ElevenLabs streaming API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from src.errors import SynthesisError
from src.config.limits import SYNTHESIS_HTTP_TIMEOUT_S
from src.config.providers import SYNTHESIS_ELEVENLABS
from src.config.speech import ELEVENLABS_STREAM_URL_TEMPLATE
from src.providers.base.synthesis import SynthesisProvider

if TYPE_CHECKING:
    from src.state.settings import AppSettings, ElevenLabsSettings

logger = logging.getLogger(__name__)


class ElevenLabsSynthesisProvider(SynthesisProvider):
    name = SYNTHESIS_ELEVENLABS

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport
        self._settings: ElevenLabsSettings | None = None
        self._client: httpx.AsyncClient | None = None

    async def initialize(self, settings: AppSettings) -> None:
        self._settings = settings.elevenlabs
        if not settings.elevenlabs.api_key or not settings.elevenlabs.voice_id:
            logger.warning("ELEVENLABS_API_KEY/ELEVENLABS_VOICE_ID not set; synthesis requests will fail")
        self._client = httpx.AsyncClient(timeout=SYNTHESIS_HTTP_TIMEOUT_S, transport=self._transport)

    async def synthesize(self, text: str) -> bytes | None:
        settings = self._settings
        if settings is None or self._client is None:
            raise SynthesisError("elevenlabs synthesis provider is not initialized")
        if not settings.api_key or not settings.voice_id:
            raise SynthesisError("elevenlabs api key/voice id are not configured")

        url = ELEVENLABS_STREAM_URL_TEMPLATE.format(voice_id=settings.voice_id)
        headers = {
            "xi-api-key": settings.api_key,
            "Content-Type": "application/json",
            "Accept": "audio/pcm",
        }
        body = {
            "text": text,
            "model_id": settings.model_id,
            "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
        }
        audio = bytearray()
        async with self._client.stream(
            "POST",
            url,
            params={"output_format": settings.output_format},
            headers=headers,
            json=body,
        ) as response:
            if response.status_code != 200:
                raise SynthesisError("Speech synthesis failed", status_code=response.status_code)
            async for chunk in response.aiter_bytes():
                audio.extend(chunk)
        return bytes(audio) or None

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()


__all__ = ["ElevenLabsSynthesisProvider"]
