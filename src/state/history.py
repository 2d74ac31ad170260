"""Bounded conversation history with a pinned system turn."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from src.config.conversation import ROLE_USER, ROLE_SYSTEM, ROLE_ASSISTANT


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    role: str
    content: str


class ConversationHistory:
    """Ordered turns that always start with one system turn.

    At most ``max_history`` non-system turns are retained; appending beyond that
    evicts the oldest non-system turn first.
    """

    def __init__(self, *, system_prompt: str, max_history: int) -> None:
        self._system = ConversationTurn(ROLE_SYSTEM, system_prompt)
        self._max_history = max(0, int(max_history))
        self._turns: deque[ConversationTurn] = deque()

    @property
    def max_history(self) -> int:
        return self._max_history

    def __len__(self) -> int:
        return len(self._turns) + 1

    def append(self, role: str, content: str) -> None:
        self._turns.append(ConversationTurn(role, content))
        while len(self._turns) > self._max_history:
            self._turns.popleft()

    def add_user(self, content: str) -> None:
        self.append(ROLE_USER, content)

    def add_assistant(self, content: str) -> None:
        self.append(ROLE_ASSISTANT, content)

    def turns(self) -> list[ConversationTurn]:
        return [self._system, *self._turns]

    def as_messages(self) -> list[dict[str, str]]:
        return [{"role": turn.role, "content": turn.content} for turn in self.turns()]

    def clear(self) -> None:
        self._turns.clear()


__all__ = ["ConversationHistory", "ConversationTurn"]
