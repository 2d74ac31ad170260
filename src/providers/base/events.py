"""Callbacks a recognition provider emits for one session."""

from __future__ import annotations

from typing import Protocol


class RecognitionEvents(Protocol):
    def on_partial(self, text: str) -> None: ...

    def on_final(self, text: str) -> None: ...

    def on_session_boundary(self, started: bool) -> None: ...

    def on_canceled(self, reason: str) -> None: ...


__all__ = ["RecognitionEvents"]
