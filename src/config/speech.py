"""Speech backend configuration (Voxtral recognition, Azure and ElevenLabs synthesis)."""

from __future__ import annotations

# Voxtral realtime STT server (Yap JSON envelope over WebSocket)
ENV_VOXTRAL_URL = "VOXTRAL_URL"
DEFAULT_VOXTRAL_URL = "ws://127.0.0.1:8000/ws"

# Silence after detected speech that closes an utterance.
ENV_VOXTRAL_END_SILENCE_MS = "VOXTRAL_END_SILENCE_MS"
DEFAULT_VOXTRAL_END_SILENCE_MS = 1000

# Azure Speech REST synthesis
ENV_AZURE_SPEECH_REGION = "AZURE_SPEECH_REGION"
ENV_SPEECH_LANGUAGE = "SPEECH_LANGUAGE"
ENV_SPEECH_VOICE = "SPEECH_VOICE"
ENV_AZURE_TTS_OUTPUT_FORMAT = "AZURE_TTS_OUTPUT_FORMAT"

DEFAULT_AZURE_SPEECH_REGION = ""
DEFAULT_SPEECH_LANGUAGE = "zh-CN"
DEFAULT_SPEECH_VOICE = "zh-CN-XiaochenMultilingualNeural"
DEFAULT_AZURE_TTS_OUTPUT_FORMAT = "raw-16khz-16bit-mono-pcm"

AZURE_TTS_ENDPOINT_TEMPLATE = "https://{region}.tts.speech.microsoft.com/cognitiveservices/v1"
AZURE_CN_TTS_ENDPOINT_TEMPLATE = "https://{region}.tts.speech.azure.cn/cognitiveservices/v1"
AZURE_TTS_USER_AGENT = "voice-gateway"

# ElevenLabs streaming synthesis
ENV_ELEVENLABS_VOICE_ID = "ELEVENLABS_VOICE_ID"
ENV_ELEVENLABS_MODEL_ID = "ELEVENLABS_MODEL_ID"
ENV_ELEVENLABS_OUTPUT_FORMAT = "ELEVENLABS_OUTPUT_FORMAT"

DEFAULT_ELEVENLABS_VOICE_ID = ""
DEFAULT_ELEVENLABS_MODEL_ID = "eleven_multilingual_v2"
DEFAULT_ELEVENLABS_OUTPUT_FORMAT = "pcm_16000"

ELEVENLABS_STREAM_URL_TEMPLATE = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}/stream"

__all__ = [
    "ENV_VOXTRAL_URL",
    "DEFAULT_VOXTRAL_URL",
    "ENV_VOXTRAL_END_SILENCE_MS",
    "DEFAULT_VOXTRAL_END_SILENCE_MS",
    "ENV_AZURE_SPEECH_REGION",
    "ENV_SPEECH_LANGUAGE",
    "ENV_SPEECH_VOICE",
    "ENV_AZURE_TTS_OUTPUT_FORMAT",
    "DEFAULT_AZURE_SPEECH_REGION",
    "DEFAULT_SPEECH_LANGUAGE",
    "DEFAULT_SPEECH_VOICE",
    "DEFAULT_AZURE_TTS_OUTPUT_FORMAT",
    "AZURE_TTS_ENDPOINT_TEMPLATE",
    "AZURE_CN_TTS_ENDPOINT_TEMPLATE",
    "AZURE_TTS_USER_AGENT",
    "ENV_ELEVENLABS_VOICE_ID",
    "ENV_ELEVENLABS_MODEL_ID",
    "ENV_ELEVENLABS_OUTPUT_FORMAT",
    "DEFAULT_ELEVENLABS_VOICE_ID",
    "DEFAULT_ELEVENLABS_MODEL_ID",
    "DEFAULT_ELEVENLABS_OUTPUT_FORMAT",
    "ELEVENLABS_STREAM_URL_TEMPLATE",
]
