"""Split a streamed reply into sentences on terminal punctuation."""

from __future__ import annotations

import re

from src.config.conversation import SENTENCE_TERMINATOR_PATTERN


class SentenceSegmenter:
    """Accumulates chunks; a chunk containing a terminator closes the current sentence.

    The whole chunk joins the sentence it closes, so text after the terminator in
    the same chunk stays with that sentence.
    """

    def __init__(self, pattern: str = SENTENCE_TERMINATOR_PATTERN) -> None:
        self._terminator = re.compile(pattern)
        self._current = ""

    @property
    def pending(self) -> str:
        return self._current

    def feed(self, chunk: str) -> str | None:
        self._current += chunk
        if not self._terminator.search(chunk):
            return None
        sentence, self._current = self._current, ""
        return sentence if sentence.strip() else None

    def flush(self) -> str | None:
        sentence, self._current = self._current, ""
        return sentence if sentence.strip() else None


__all__ = ["SentenceSegmenter"]
