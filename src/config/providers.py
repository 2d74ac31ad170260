"""Provider selection configuration (names only; credentials live in secrets)."""

from __future__ import annotations

RECOGNITION_VOXTRAL = "voxtral"
SYNTHESIS_AZURE = "azure"
SYNTHESIS_ELEVENLABS = "elevenlabs"
GENERATION_OPENAI = "openai"

ENV_RECOGNITION_PROVIDER = "RECOGNITION_PROVIDER"
ENV_SYNTHESIS_PROVIDER = "SYNTHESIS_PROVIDER"
ENV_GENERATION_PROVIDER = "GENERATION_PROVIDER"
DEFAULT_RECOGNITION_PROVIDER = RECOGNITION_VOXTRAL
DEFAULT_SYNTHESIS_PROVIDER = SYNTHESIS_AZURE
DEFAULT_GENERATION_PROVIDER = GENERATION_OPENAI

# Start the recognizer as soon as a client connects instead of on startRecognition.
ENV_RECOGNITION_EAGER_START = "RECOGNITION_EAGER_START"
DEFAULT_RECOGNITION_EAGER_START = True

__all__ = [
    "RECOGNITION_VOXTRAL",
    "SYNTHESIS_AZURE",
    "SYNTHESIS_ELEVENLABS",
    "GENERATION_OPENAI",
    "ENV_RECOGNITION_PROVIDER",
    "ENV_SYNTHESIS_PROVIDER",
    "ENV_GENERATION_PROVIDER",
    "DEFAULT_RECOGNITION_PROVIDER",
    "DEFAULT_SYNTHESIS_PROVIDER",
    "DEFAULT_GENERATION_PROVIDER",
    "ENV_RECOGNITION_EAGER_START",
    "DEFAULT_RECOGNITION_EAGER_START",
]
