"""Per-connection WebSocket lifecycle helpers (heartbeat enforcement)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

from src.state.session import ConnectionSession
from src.config.websocket import (
    WS_MSG_HEARTBEAT,
    WS_CLOSE_HEARTBEAT_CODE,
    WS_CLOSE_HEARTBEAT_REASON,
    DEFAULT_WS_HEARTBEAT_GRACE_S,
    DEFAULT_WS_HEARTBEAT_INTERVAL_S,
)

logger = logging.getLogger(__name__)


class HeartbeatMonitor:
    """Probes the client every ``interval_s`` and tears the connection down on silence.

    A probe that cannot be written, or no inbound frame for ``interval_s +
    grace_s``, closes the socket and runs ``on_timeout`` once. ``grace_s <= 0``
    disables the inbound check and leaves only the send probe.
    """

    def __init__(
        self,
        websocket: Any,
        session: ConnectionSession,
        *,
        on_timeout: Callable[[], Awaitable[None]],
        interval_s: float | None = None,
        grace_s: float | None = None,
    ) -> None:
        self._ws = websocket
        self._session = session
        self._on_timeout = on_timeout
        self._interval_s = float(DEFAULT_WS_HEARTBEAT_INTERVAL_S if interval_s is None else interval_s)
        self._grace_s = float(DEFAULT_WS_HEARTBEAT_GRACE_S if grace_s is None else grace_s)
        self._task: asyncio.Task | None = None
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._loop())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

    async def check(self) -> bool:
        """Run one probe; returns False if the connection was declared dead."""
        session = self._session
        if not session.active:
            return False
        sent = await session.channel.send_and_wait(WS_MSG_HEARTBEAT, timeout_s=max(1.0, self._interval_s))
        if not sent:
            logger.warning("heartbeat probe failed connection_id=%s", session.connection_id)
            await self._expire()
            return False
        if self._grace_s > 0:
            silent_for = time.monotonic() - session.last_inbound_at
            if silent_for > self._interval_s + self._grace_s:
                logger.warning(
                    "no inbound traffic for %.1fs, closing connection_id=%s",
                    silent_for,
                    session.connection_id,
                )
                await self._expire()
                return False
        return True

    async def _expire(self) -> None:
        if self._fired:
            return
        self._fired = True
        with contextlib.suppress(Exception):
            await self._ws.close(code=WS_CLOSE_HEARTBEAT_CODE, reason=WS_CLOSE_HEARTBEAT_REASON)
        await self._on_timeout()

    async def _loop(self) -> None:
        try:
            while self._session.active:
                await asyncio.sleep(self._interval_s)
                if not await self.check():
                    break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("heartbeat monitor exiting due to unexpected error", exc_info=True)


__all__ = ["HeartbeatMonitor"]
