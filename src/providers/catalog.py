"""Built-in provider variants."""

from __future__ import annotations

from src.config.providers import (
    SYNTHESIS_AZURE,
    GENERATION_OPENAI,
    RECOGNITION_VOXTRAL,
    SYNTHESIS_ELEVENLABS,
)

from .capability import Capability
from .registry import ProviderRegistry
from .synthesis.azure import AzureSynthesisProvider
from .recognition.voxtral import VoxtralRecognitionProvider
from .synthesis.elevenlabs import ElevenLabsSynthesisProvider
from .generation.openai_chat import OpenAIGenerationProvider


def register_builtin_providers(registry: ProviderRegistry) -> ProviderRegistry:
    registry.register(Capability.RECOGNITION, RECOGNITION_VOXTRAL, VoxtralRecognitionProvider)
    registry.register(Capability.SYNTHESIS, SYNTHESIS_AZURE, AzureSynthesisProvider)
    registry.register(Capability.SYNTHESIS, SYNTHESIS_ELEVENLABS, ElevenLabsSynthesisProvider)
    registry.register(Capability.GENERATION, GENERATION_OPENAI, OpenAIGenerationProvider)
    return registry


__all__ = ["register_builtin_providers"]
