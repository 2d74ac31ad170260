"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    recognition_start_timeout_s: float
    recognition_stop_timeout_s: float
    synthesis_timeout_s: float


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    heartbeat_interval_s: float
    heartbeat_grace_s: float
    outbound_queue_max: int


@dataclass(frozen=True, slots=True)
class AudioSettings:
    voice_detection_threshold: int
    vad_window_samples: int


@dataclass(frozen=True, slots=True)
class ConversationSettings:
    max_history: int
    system_prompt: str
    clear_on_disconnect: bool


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    recognition: str
    synthesis: str
    generation: str
    recognition_eager_start: bool


@dataclass(frozen=True, slots=True)
class OpenAISettings:
    api_key: str
    base_url: str
    model: str
    temperature: float
    max_tokens: int


@dataclass(frozen=True, slots=True)
class VoxtralSettings:
    url: str
    api_key: str
    end_silence_ms: int


@dataclass(frozen=True, slots=True)
class AzureSpeechSettings:
    key: str
    region: str
    language: str
    voice: str
    output_format: str


@dataclass(frozen=True, slots=True)
class ElevenLabsSettings:
    api_key: str
    voice_id: str
    model_id: str
    output_format: str


@dataclass(frozen=True, slots=True)
class AppSettings:
    limits: LimitsSettings
    websocket: WebSocketSettings
    audio: AudioSettings
    conversation: ConversationSettings
    providers: ProviderSettings
    openai: OpenAISettings
    voxtral: VoxtralSettings
    azure: AzureSpeechSettings
    elevenlabs: ElevenLabsSettings


__all__ = [
    "AppSettings",
    "AudioSettings",
    "AzureSpeechSettings",
    "ConversationSettings",
    "ElevenLabsSettings",
    "LimitsSettings",
    "OpenAISettings",
    "ProviderSettings",
    "VoxtralSettings",
    "WebSocketSettings",
]
