"""Conversation history and reply segmentation configuration."""

from __future__ import annotations

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

ENV_MAX_CONVERSATION_HISTORY = "MAX_CONVERSATION_HISTORY"
DEFAULT_MAX_CONVERSATION_HISTORY = 10

ENV_SYSTEM_PROMPT = "SYSTEM_PROMPT"
DEFAULT_SYSTEM_PROMPT = (
    "You are an intelligent voice assistant named Xiao Rui. "
    "Please respond in a conversational, concise way. Avoid using emoji or special characters."
)

ENV_CLEAR_ON_DISCONNECT = "CLEAR_ON_DISCONNECT"
DEFAULT_CLEAR_ON_DISCONNECT = True

# East-Asian and Latin terminal punctuation; a chunk containing any of these closes a sentence.
SENTENCE_TERMINATOR_PATTERN = r"[！。？：，!.?:;]"

__all__ = [
    "ROLE_SYSTEM",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ENV_MAX_CONVERSATION_HISTORY",
    "DEFAULT_MAX_CONVERSATION_HISTORY",
    "ENV_SYSTEM_PROMPT",
    "DEFAULT_SYSTEM_PROMPT",
    "ENV_CLEAR_ON_DISCONNECT",
    "DEFAULT_CLEAR_ON_DISCONNECT",
    "SENTENCE_TERMINATOR_PATTERN",
]
