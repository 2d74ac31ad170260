"""Text deltas out of a streamed chat completion."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


class ChatDeltaStream:
    """Yields ``choices[0].delta.content`` pieces; ``aclose`` aborts the HTTP response."""

    def __init__(self, stream: Any) -> None:
        self._stream = stream
        self._deltas: AsyncGenerator[str, None] | None = None

    def __aiter__(self) -> AsyncGenerator[str, None]:
        if self._deltas is None:
            self._deltas = self._iterate()
        return self._deltas

    async def _iterate(self) -> AsyncGenerator[str, None]:
        async for chunk in self._stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta
            content = getattr(delta, "content", None) if delta is not None else None
            if content:
                yield content

    async def aclose(self) -> None:
        try:
            await self._stream.close()
        finally:
            deltas, self._deltas = self._deltas, None
            if deltas is not None:
                try:
                    await deltas.aclose()
                except RuntimeError:
                    # Still suspended in another task's __anext__; that task unwinds it.
                    logger.debug("delta generator busy at close", exc_info=True)


__all__ = ["ChatDeltaStream"]
