"""Logging configuration (env-resolved at import; logging is set up before settings load)."""

from __future__ import annotations

import os

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Client libraries that log every request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "websockets")

__all__ = ["LOG_LEVEL", "LOG_FORMAT", "QUIET_LOGGERS"]
