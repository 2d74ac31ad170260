"""Generation provider backed by an OpenAI-compatible chat completions API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from collections.abc import AsyncIterator

from openai import AsyncOpenAI

from src.errors import GenerationError
from src.config.providers import GENERATION_OPENAI
from src.providers.base.generation import GenerationProvider

from .deltas import ChatDeltaStream

if TYPE_CHECKING:
    from src.state.settings import AppSettings, OpenAISettings

logger = logging.getLogger(__name__)


class OpenAIGenerationProvider(GenerationProvider):
    name = GENERATION_OPENAI

    def __init__(self, *, client: AsyncOpenAI | None = None) -> None:
        self._client = client
        self._settings: OpenAISettings | None = None

    async def initialize(self, settings: AppSettings) -> None:
        self._settings = settings.openai
        if self._client is not None:
            return
        if not settings.openai.api_key:
            logger.warning("OPENAI_API_KEY is not set; generation requests will fail")

    async def stream_reply(self, messages: list[dict[str, str]]) -> AsyncIterator[str]:
        client = self._ensure_client()
        stream = await client.chat.completions.create(
            model=self._settings.model,
            messages=messages,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
            stream=True,
        )
        return ChatDeltaStream(stream)

    def _ensure_client(self) -> AsyncOpenAI:
        if self._settings is None:
            raise GenerationError("openai generation provider is not initialized")
        if self._client is None:
            # The SDK refuses to construct without credentials, so build on first use.
            if not self._settings.api_key:
                raise GenerationError("OPENAI_API_KEY is not set")
            self._client = AsyncOpenAI(api_key=self._settings.api_key, base_url=self._settings.base_url)
        return self._client

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.close()


__all__ = ["OpenAIGenerationProvider"]
