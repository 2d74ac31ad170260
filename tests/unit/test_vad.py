from __future__ import annotations

import pytest

from tests.utils.runtime import pcm_frame
from src.realtime.vad import is_valid_pcm_frame, mean_abs_amplitude, detect_voice_activity


@pytest.mark.parametrize(("frame", "valid"), [(b"", False), (b"\x00", False), (bytes(3), False), (bytes(2), True), (bytes(320), True)])
def test_is_valid_pcm_frame(frame: bytes, valid: bool) -> None:
    assert is_valid_pcm_frame(frame) is valid


def test_mean_abs_amplitude_uses_leading_window_only() -> None:
    frame = pcm_frame(-400, samples=50) + pcm_frame(0, samples=50)
    assert mean_abs_amplitude(frame, window_samples=50) == pytest.approx(400.0)
    assert mean_abs_amplitude(frame, window_samples=100) == pytest.approx(200.0)


def test_mean_abs_amplitude_handles_int16_minimum() -> None:
    assert mean_abs_amplitude(pcm_frame(-32768, samples=10), window_samples=10) == pytest.approx(32768.0)


def test_detect_voice_activity_is_strictly_above_threshold() -> None:
    assert detect_voice_activity(pcm_frame(301), threshold=300, window_samples=50) is True
    assert detect_voice_activity(pcm_frame(300), threshold=300, window_samples=50) is False
    assert detect_voice_activity(pcm_frame(0), threshold=300, window_samples=50) is False


def test_short_frame_uses_available_samples() -> None:
    assert detect_voice_activity(pcm_frame(1000, samples=4), threshold=300, window_samples=50) is True
