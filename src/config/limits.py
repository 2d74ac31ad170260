"""Admission control and provider deadline configuration."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
DEFAULT_MAX_CONCURRENT_CONNECTIONS = 100

# Recognizer startup/stop deadlines. A stop that overruns is forced.
ENV_RECOGNITION_START_TIMEOUT_S = "RECOGNITION_START_TIMEOUT_S"
ENV_RECOGNITION_STOP_TIMEOUT_S = "RECOGNITION_STOP_TIMEOUT_S"
DEFAULT_RECOGNITION_START_TIMEOUT_S = 5.0
DEFAULT_RECOGNITION_STOP_TIMEOUT_S = 3.0

# Per-sentence synthesis deadline; the HTTP client timeout sits slightly above it.
ENV_SYNTHESIS_TIMEOUT_S = "SYNTHESIS_TIMEOUT_S"
DEFAULT_SYNTHESIS_TIMEOUT_S = 8.0
SYNTHESIS_HTTP_TIMEOUT_S = 10.0

__all__ = [
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "ENV_RECOGNITION_START_TIMEOUT_S",
    "ENV_RECOGNITION_STOP_TIMEOUT_S",
    "DEFAULT_RECOGNITION_START_TIMEOUT_S",
    "DEFAULT_RECOGNITION_STOP_TIMEOUT_S",
    "ENV_SYNTHESIS_TIMEOUT_S",
    "DEFAULT_SYNTHESIS_TIMEOUT_S",
    "SYNTHESIS_HTTP_TIMEOUT_S",
]
