"""Provider capabilities."""

from __future__ import annotations

from enum import Enum


class Capability(str, Enum):
    RECOGNITION = "recognition"
    SYNTHESIS = "synthesis"
    GENERATION = "generation"


__all__ = ["Capability"]
