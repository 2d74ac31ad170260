"""Generation capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from collections.abc import AsyncIterator

if TYPE_CHECKING:
    from src.state.settings import AppSettings
    from src.state.session import ConnectionSession


class GenerationProvider(ABC):
    """Chat-completion backend.

    ``stream_reply`` opens the upstream call and returns an async iterator of
    text deltas. If the iterator has ``aclose`` it is used to abort the call on
    barge-in. Conversation state lives on the session, not in the provider.
    """

    name: str = ""

    async def initialize(self, settings: AppSettings) -> None:
        return None

    @abstractmethod
    async def stream_reply(self, messages: list[dict[str, str]]) -> AsyncIterator[str]: ...

    def cancel_activities(self, session: ConnectionSession) -> None:
        handle = session.generation_handle
        session.generation_handle = None
        if handle is not None:
            handle.cancel()

    def get_conversation_history(self, session: ConnectionSession) -> list[dict[str, str]]:
        return session.history.as_messages()

    def clear_conversation_history(self, session: ConnectionSession) -> None:
        session.history.clear()

    async def cleanup(self, session: ConnectionSession) -> None:
        self.cancel_activities(session)

    async def aclose(self) -> None:
        return None


__all__ = ["GenerationProvider"]
