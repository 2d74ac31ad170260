"""Per-connection state shared by every realtime component."""

from __future__ import annotations

import time
import uuid
import asyncio
import logging
from typing import TYPE_CHECKING, Any
from collections import deque
from dataclasses import field, dataclass
from collections.abc import Coroutine

from .history import ConversationHistory

if TYPE_CHECKING:
    from src.realtime.handle import GenerationHandle
    from src.realtime.envelope import ClientChannel

logger = logging.getLogger(__name__)


def new_connection_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True, eq=False)
class ConnectionSession:
    """Mutable state for one client connection.

    ``active`` flips to False synchronously at the start of teardown; every
    component checks it before acting, and the channel refuses writes after close.
    """

    connection_id: str
    channel: ClientChannel
    history: ConversationHistory
    active: bool = True
    speaking: bool = False
    processing: bool = False
    interrupt_notified: bool = False
    first_audio_received: bool = False
    pending_sentences: deque[str] = field(default_factory=deque)
    generation_handle: GenerationHandle | None = None
    # Bumped by every new turn and every interrupt; a turn whose number is stale
    # must not install its stream.
    generation_turn: int = 0
    recognition_handle: Any = None
    synthesis_task: asyncio.Task | None = None
    synthesis_handle: Any = None
    tasks: set[asyncio.Task] = field(default_factory=set)
    connected_at: float = field(default_factory=time.time)
    last_inbound_at: float = field(default_factory=time.monotonic)

    def touch(self) -> None:
        self.last_inbound_at = time.monotonic()

    def spawn(self, coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=f"{name}:{self.connection_id}")
        self.tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self.tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "session task %s failed connection_id=%s",
                task.get_name(),
                self.connection_id,
                exc_info=exc,
            )

    def cancel_tasks(self) -> None:
        current = asyncio.current_task()
        for task in list(self.tasks):
            if task is not current and not task.done():
                task.cancel()


__all__ = ["ConnectionSession", "new_connection_id"]
