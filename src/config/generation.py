"""OpenAI-compatible chat completion configuration."""

from __future__ import annotations

ENV_OPENAI_BASE_URL = "OPENAI_BASE_URL"
ENV_OPENAI_MODEL = "OPENAI_MODEL"
ENV_OPENAI_TEMPERATURE = "OPENAI_TEMPERATURE"
ENV_OPENAI_MAX_TOKENS = "OPENAI_MAX_TOKENS"

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_OPENAI_TEMPERATURE = 0.7
DEFAULT_OPENAI_MAX_TOKENS = 300

__all__ = [
    "ENV_OPENAI_BASE_URL",
    "ENV_OPENAI_MODEL",
    "ENV_OPENAI_TEMPERATURE",
    "ENV_OPENAI_MAX_TOKENS",
    "DEFAULT_OPENAI_BASE_URL",
    "DEFAULT_OPENAI_MODEL",
    "DEFAULT_OPENAI_TEMPERATURE",
    "DEFAULT_OPENAI_MAX_TOKENS",
]
