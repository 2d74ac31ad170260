"""Amplitude-based voice activity detection over PCM16 frames."""

from __future__ import annotations

import numpy as np

from src.config.audio import PCM_DTYPE, PCM_SAMPLE_WIDTH_BYTES


def is_valid_pcm_frame(frame: bytes) -> bool:
    return len(frame) >= PCM_SAMPLE_WIDTH_BYTES and len(frame) % PCM_SAMPLE_WIDTH_BYTES == 0


def mean_abs_amplitude(frame: bytes, *, window_samples: int) -> float:
    """Mean absolute amplitude of the leading ``window_samples`` samples."""
    usable = min(len(frame) // PCM_SAMPLE_WIDTH_BYTES, max(1, int(window_samples)))
    if usable <= 0:
        return 0.0
    samples = np.frombuffer(frame, dtype=PCM_DTYPE, count=usable)
    # int32 so abs(-32768) does not wrap.
    return float(np.abs(samples.astype(np.int32)).mean())


def detect_voice_activity(frame: bytes, *, threshold: int, window_samples: int) -> bool:
    return mean_abs_amplitude(frame, window_samples=window_samples) > threshold


__all__ = ["detect_voice_activity", "is_valid_pcm_frame", "mean_abs_amplitude"]
