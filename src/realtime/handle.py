"""Cancelable reference to one in-progress generation stream."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


class GenerationHandle:
    def __init__(self, stream: AsyncIterator[str], *, connection_id: str) -> None:
        self._stream = stream
        self._connection_id = connection_id
        self._cancelled = False
        self._close_task: asyncio.Task | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __aiter__(self) -> AsyncIterator[str]:
        return self._stream.__aiter__()

    def cancel(self) -> None:
        """Mark the handle cancelled and abort the upstream stream in the background."""
        if self._cancelled:
            return
        self._cancelled = True
        closer = getattr(self._stream, "aclose", None)
        if closer is None:
            return
        try:
            self._close_task = asyncio.get_running_loop().create_task(self._abort(closer))
        except RuntimeError:
            logger.debug("no running loop to abort generation connection_id=%s", self._connection_id)

    async def aclose(self) -> None:
        closer = getattr(self._stream, "aclose", None)
        if closer is not None:
            await self._abort(closer)

    async def _abort(self, closer: Any) -> None:
        try:
            await closer()
        except Exception:
            # Aborting a stream that is mid-read may raise; the consumer notices the cancel on its next chunk.
            logger.debug("generation abort raised connection_id=%s", self._connection_id, exc_info=True)


__all__ = ["GenerationHandle"]
