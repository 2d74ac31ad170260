"""Provider credentials."""

from __future__ import annotations

import os

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_VOXTRAL_API_KEY = "VOXTRAL_API_KEY"
ENV_AZURE_SPEECH_KEY = "AZURE_SPEECH_KEY"
ENV_ELEVENLABS_API_KEY = "ELEVENLABS_API_KEY"


def _secret(name: str) -> str:
    return (os.getenv(name) or "").strip()


def get_openai_api_key() -> str:
    return _secret(ENV_OPENAI_API_KEY)


def get_voxtral_api_key() -> str:
    return _secret(ENV_VOXTRAL_API_KEY)


def get_azure_speech_key() -> str:
    return _secret(ENV_AZURE_SPEECH_KEY)


def get_elevenlabs_api_key() -> str:
    return _secret(ENV_ELEVENLABS_API_KEY)


__all__ = [
    "ENV_OPENAI_API_KEY",
    "ENV_VOXTRAL_API_KEY",
    "ENV_AZURE_SPEECH_KEY",
    "ENV_ELEVENLABS_API_KEY",
    "get_openai_api_key",
    "get_voxtral_api_key",
    "get_azure_speech_key",
    "get_elevenlabs_api_key",
]
