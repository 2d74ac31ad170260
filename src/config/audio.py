"""Inbound audio format and voice activity detection configuration."""

from __future__ import annotations

# Clients stream PCM16 little-endian mono at 16kHz.
ASR_SAMPLE_RATE_HZ: int = 16000
PCM_SAMPLE_WIDTH_BYTES: int = 2
PCM_DTYPE: str = "<i2"

ENV_VOICE_DETECTION_THRESHOLD = "VOICE_DETECTION_THRESHOLD"
DEFAULT_VOICE_DETECTION_THRESHOLD = 300

# Leading samples inspected per frame (50 samples = 100 bytes).
ENV_VAD_WINDOW_SAMPLES = "VAD_WINDOW_SAMPLES"
DEFAULT_VAD_WINDOW_SAMPLES = 50

__all__ = [
    "ASR_SAMPLE_RATE_HZ",
    "PCM_SAMPLE_WIDTH_BYTES",
    "PCM_DTYPE",
    "ENV_VOICE_DETECTION_THRESHOLD",
    "DEFAULT_VOICE_DETECTION_THRESHOLD",
    "ENV_VAD_WINDOW_SAMPLES",
    "DEFAULT_VAD_WINDOW_SAMPLES",
]
