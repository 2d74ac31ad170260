"""Synthesis provider backed by the Azure Speech REST API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape, quoteattr

import httpx

from src.errors import SynthesisError
from src.config.limits import SYNTHESIS_HTTP_TIMEOUT_S
from src.config.providers import SYNTHESIS_AZURE
from src.providers.base.synthesis import SynthesisProvider
from src.config.speech import AZURE_TTS_USER_AGENT, AZURE_TTS_ENDPOINT_TEMPLATE, AZURE_CN_TTS_ENDPOINT_TEMPLATE

if TYPE_CHECKING:
    from src.state.settings import AppSettings, AzureSpeechSettings

logger = logging.getLogger(__name__)


def build_ssml(text: str, *, language: str, voice: str) -> str:
    return (
        f'<speak version="1.0" xmlns="http://www.w3.org/2001/10/synthesis" xml:lang={quoteattr(language)}>'
        f"<voice name={quoteattr(voice)}>{escape(text)}</voice>"
        "</speak>"
    )


def azure_tts_endpoint(region: str) -> str:
    region = region.strip().lower()
    template = AZURE_CN_TTS_ENDPOINT_TEMPLATE if region.startswith("china") else AZURE_TTS_ENDPOINT_TEMPLATE
    return template.format(region=region)


class AzureSynthesisProvider(SynthesisProvider):
    name = SYNTHESIS_AZURE

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport
        self._settings: AzureSpeechSettings | None = None
        self._client: httpx.AsyncClient | None = None

    async def initialize(self, settings: AppSettings) -> None:
        self._settings = settings.azure
        if not settings.azure.key or not settings.azure.region:
            logger.warning("AZURE_SPEECH_KEY/AZURE_SPEECH_REGION not set; synthesis requests will fail")
        self._client = httpx.AsyncClient(timeout=SYNTHESIS_HTTP_TIMEOUT_S, transport=self._transport)

    async def synthesize(self, text: str) -> bytes | None:
        settings = self._settings
        if settings is None or self._client is None:
            raise SynthesisError("azure synthesis provider is not initialized")
        if not settings.key or not settings.region:
            raise SynthesisError("azure speech key/region are not configured")

        response = await self._client.post(
            azure_tts_endpoint(settings.region),
            content=build_ssml(text, language=settings.language, voice=settings.voice).encode("utf-8"),
            headers={
                "Ocp-Apim-Subscription-Key": settings.key,
                "Content-Type": "application/ssml+xml",
                "X-Microsoft-OutputFormat": settings.output_format,
                "User-Agent": AZURE_TTS_USER_AGENT,
            },
        )
        if response.status_code != 200:
            raise SynthesisError("Speech synthesis failed", status_code=response.status_code)
        return response.content or None

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()


__all__ = ["AzureSynthesisProvider", "azure_tts_endpoint", "build_ssml"]
