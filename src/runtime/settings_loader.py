"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from src.state.settings import (
    AppSettings,
    AudioSettings,
    VoxtralSettings,
    LimitsSettings,
    OpenAISettings,
    ProviderSettings,
    WebSocketSettings,
    ElevenLabsSettings,
    AzureSpeechSettings,
    ConversationSettings,
)
from src.config.secrets import (
    get_openai_api_key,
    get_voxtral_api_key,
    get_azure_speech_key,
    get_elevenlabs_api_key,
)
from src.config.websocket import (
    ENV_WS_HEARTBEAT_GRACE_S,
    ENV_WS_OUTBOUND_QUEUE_MAX,
    ENV_WS_HEARTBEAT_INTERVAL_S,
    DEFAULT_WS_HEARTBEAT_GRACE_S,
    DEFAULT_WS_OUTBOUND_QUEUE_MAX,
    DEFAULT_WS_HEARTBEAT_INTERVAL_S,
)
from src.config.audio import (
    ENV_VAD_WINDOW_SAMPLES,
    DEFAULT_VAD_WINDOW_SAMPLES,
    ENV_VOICE_DETECTION_THRESHOLD,
    DEFAULT_VOICE_DETECTION_THRESHOLD,
)
from src.config.conversation import (
    ENV_SYSTEM_PROMPT,
    DEFAULT_SYSTEM_PROMPT,
    ENV_CLEAR_ON_DISCONNECT,
    DEFAULT_CLEAR_ON_DISCONNECT,
    ENV_MAX_CONVERSATION_HISTORY,
    DEFAULT_MAX_CONVERSATION_HISTORY,
)
from src.config.generation import (
    ENV_OPENAI_MODEL,
    ENV_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
    ENV_OPENAI_MAX_TOKENS,
    ENV_OPENAI_TEMPERATURE,
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MAX_TOKENS,
    DEFAULT_OPENAI_TEMPERATURE,
)
from src.config.providers import (
    ENV_SYNTHESIS_PROVIDER,
    ENV_GENERATION_PROVIDER,
    ENV_RECOGNITION_PROVIDER,
    DEFAULT_SYNTHESIS_PROVIDER,
    ENV_RECOGNITION_EAGER_START,
    DEFAULT_GENERATION_PROVIDER,
    DEFAULT_RECOGNITION_PROVIDER,
    DEFAULT_RECOGNITION_EAGER_START,
)
from src.config.limits import (
    ENV_SYNTHESIS_TIMEOUT_S,
    DEFAULT_SYNTHESIS_TIMEOUT_S,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    ENV_RECOGNITION_STOP_TIMEOUT_S,
    ENV_RECOGNITION_START_TIMEOUT_S,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_RECOGNITION_STOP_TIMEOUT_S,
    DEFAULT_RECOGNITION_START_TIMEOUT_S,
)
from src.config.speech import (
    ENV_SPEECH_VOICE,
    ENV_VOXTRAL_URL,
    DEFAULT_SPEECH_VOICE,
    DEFAULT_VOXTRAL_URL,
    ENV_SPEECH_LANGUAGE,
    DEFAULT_SPEECH_LANGUAGE,
    ENV_AZURE_SPEECH_REGION,
    ENV_ELEVENLABS_MODEL_ID,
    ENV_ELEVENLABS_VOICE_ID,
    ENV_VOXTRAL_END_SILENCE_MS,
    DEFAULT_AZURE_SPEECH_REGION,
    DEFAULT_ELEVENLABS_MODEL_ID,
    DEFAULT_ELEVENLABS_VOICE_ID,
    ENV_AZURE_TTS_OUTPUT_FORMAT,
    ENV_ELEVENLABS_OUTPUT_FORMAT,
    DEFAULT_VOXTRAL_END_SILENCE_MS,
    DEFAULT_AZURE_TTS_OUTPUT_FORMAT,
    DEFAULT_ELEVENLABS_OUTPUT_FORMAT,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def _load_limits_settings() -> LimitsSettings:
    return LimitsSettings(
        max_concurrent_connections=max(
            1, _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
        ),
        recognition_start_timeout_s=_positive(
            _float_env(ENV_RECOGNITION_START_TIMEOUT_S, DEFAULT_RECOGNITION_START_TIMEOUT_S),
            DEFAULT_RECOGNITION_START_TIMEOUT_S,
        ),
        recognition_stop_timeout_s=_positive(
            _float_env(ENV_RECOGNITION_STOP_TIMEOUT_S, DEFAULT_RECOGNITION_STOP_TIMEOUT_S),
            DEFAULT_RECOGNITION_STOP_TIMEOUT_S,
        ),
        synthesis_timeout_s=_positive(
            _float_env(ENV_SYNTHESIS_TIMEOUT_S, DEFAULT_SYNTHESIS_TIMEOUT_S),
            DEFAULT_SYNTHESIS_TIMEOUT_S,
        ),
    )


def _load_websocket_settings() -> WebSocketSettings:
    interval = _positive(
        _float_env(ENV_WS_HEARTBEAT_INTERVAL_S, DEFAULT_WS_HEARTBEAT_INTERVAL_S),
        DEFAULT_WS_HEARTBEAT_INTERVAL_S,
    )
    return WebSocketSettings(
        heartbeat_interval_s=interval,
        heartbeat_grace_s=max(0.0, _float_env(ENV_WS_HEARTBEAT_GRACE_S, DEFAULT_WS_HEARTBEAT_GRACE_S)),
        outbound_queue_max=max(1, _int_env(ENV_WS_OUTBOUND_QUEUE_MAX, DEFAULT_WS_OUTBOUND_QUEUE_MAX)),
    )


def _load_audio_settings() -> AudioSettings:
    return AudioSettings(
        voice_detection_threshold=_int_env(ENV_VOICE_DETECTION_THRESHOLD, DEFAULT_VOICE_DETECTION_THRESHOLD),
        vad_window_samples=max(1, _int_env(ENV_VAD_WINDOW_SAMPLES, DEFAULT_VAD_WINDOW_SAMPLES)),
    )


def _load_conversation_settings() -> ConversationSettings:
    return ConversationSettings(
        max_history=max(0, _int_env(ENV_MAX_CONVERSATION_HISTORY, DEFAULT_MAX_CONVERSATION_HISTORY)),
        system_prompt=_str_env(ENV_SYSTEM_PROMPT, DEFAULT_SYSTEM_PROMPT),
        clear_on_disconnect=_bool_env(ENV_CLEAR_ON_DISCONNECT, DEFAULT_CLEAR_ON_DISCONNECT),
    )


def _load_provider_settings() -> ProviderSettings:
    return ProviderSettings(
        recognition=_str_env(ENV_RECOGNITION_PROVIDER, DEFAULT_RECOGNITION_PROVIDER).lower(),
        synthesis=_str_env(ENV_SYNTHESIS_PROVIDER, DEFAULT_SYNTHESIS_PROVIDER).lower(),
        generation=_str_env(ENV_GENERATION_PROVIDER, DEFAULT_GENERATION_PROVIDER).lower(),
        recognition_eager_start=_bool_env(ENV_RECOGNITION_EAGER_START, DEFAULT_RECOGNITION_EAGER_START),
    )


def _load_openai_settings() -> OpenAISettings:
    return OpenAISettings(
        api_key=get_openai_api_key(),
        base_url=_str_env(ENV_OPENAI_BASE_URL, DEFAULT_OPENAI_BASE_URL),
        model=_str_env(ENV_OPENAI_MODEL, DEFAULT_OPENAI_MODEL),
        temperature=_float_env(ENV_OPENAI_TEMPERATURE, DEFAULT_OPENAI_TEMPERATURE),
        max_tokens=max(1, _int_env(ENV_OPENAI_MAX_TOKENS, DEFAULT_OPENAI_MAX_TOKENS)),
    )


def _load_voxtral_settings() -> VoxtralSettings:
    return VoxtralSettings(
        url=_str_env(ENV_VOXTRAL_URL, DEFAULT_VOXTRAL_URL),
        api_key=get_voxtral_api_key(),
        end_silence_ms=max(0, _int_env(ENV_VOXTRAL_END_SILENCE_MS, DEFAULT_VOXTRAL_END_SILENCE_MS)),
    )


def _load_azure_settings() -> AzureSpeechSettings:
    return AzureSpeechSettings(
        key=get_azure_speech_key(),
        region=_str_env(ENV_AZURE_SPEECH_REGION, DEFAULT_AZURE_SPEECH_REGION),
        language=_str_env(ENV_SPEECH_LANGUAGE, DEFAULT_SPEECH_LANGUAGE),
        voice=_str_env(ENV_SPEECH_VOICE, DEFAULT_SPEECH_VOICE),
        output_format=_str_env(ENV_AZURE_TTS_OUTPUT_FORMAT, DEFAULT_AZURE_TTS_OUTPUT_FORMAT),
    )


def _load_elevenlabs_settings() -> ElevenLabsSettings:
    return ElevenLabsSettings(
        api_key=get_elevenlabs_api_key(),
        voice_id=_str_env(ENV_ELEVENLABS_VOICE_ID, DEFAULT_ELEVENLABS_VOICE_ID),
        model_id=_str_env(ENV_ELEVENLABS_MODEL_ID, DEFAULT_ELEVENLABS_MODEL_ID),
        output_format=_str_env(ENV_ELEVENLABS_OUTPUT_FORMAT, DEFAULT_ELEVENLABS_OUTPUT_FORMAT),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
        audio=_load_audio_settings(),
        conversation=_load_conversation_settings(),
        providers=_load_provider_settings(),
        openai=_load_openai_settings(),
        voxtral=_load_voxtral_settings(),
        azure=_load_azure_settings(),
        elevenlabs=_load_elevenlabs_settings(),
    )


__all__ = ["load_settings"]
