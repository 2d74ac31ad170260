"""Shared error types for the voice gateway."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class ProviderNotFoundError(Exception):
    """Raised when a capability has no provider registered under the requested name."""

    capability: str
    name: str

    def __str__(self) -> str:
        return f"no {self.capability} provider named '{self.name}'"


@dataclass(eq=False)
class ProviderSetupError(Exception):
    """Raised when a provider cannot be constructed or initialized."""

    capability: str
    name: str
    reason: str

    def __str__(self) -> str:
        return f"{self.capability} provider '{self.name}' failed to initialize: {self.reason}"


@dataclass(eq=False)
class RecognitionError(Exception):
    """Raised when the recognizer cannot start, stop or accept audio."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class SynthesisError(Exception):
    """Raised when a synthesis backend rejects or fails a request."""

    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"


@dataclass(eq=False)
class GenerationError(Exception):
    """Raised when the generation backend cannot open or continue a stream."""

    message: str

    def __str__(self) -> str:
        return self.message


__all__ = [
    "GenerationError",
    "ProviderNotFoundError",
    "ProviderSetupError",
    "RecognitionError",
    "SynthesisError",
]
