"""Ordered, single-flight text-to-speech per connection."""

from __future__ import annotations

import asyncio
import logging

from src.state.session import ConnectionSession
from src.config.websocket import WS_ERROR_SYNTHESIS
from src.providers.capability import Capability
from src.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class SynthesisQueue:
    """Voices queued sentences one at a time, in enqueue order.

    The queue lives on the session (``pending_sentences``); this object only
    drives it. A burst ends when the queue drains, the session goes inactive, or
    a sentence fails, in which case the remaining sentences are dropped.
    """

    def __init__(self, *, registry: ProviderRegistry, timeout_s: float) -> None:
        self._registry = registry
        self._timeout_s = float(timeout_s)

    def enqueue(self, session: ConnectionSession, sentence: str) -> None:
        if not session.active or not sentence.strip():
            return
        session.pending_sentences.append(sentence)
        if not session.processing:
            self.process_next(session)

    def process_next(self, session: ConnectionSession) -> None:
        if not session.pending_sentences or not session.active:
            session.processing = False
            return
        running = session.synthesis_task
        if running is not None and not running.done():
            return
        session.processing = True
        session.interrupt_notified = False
        session.synthesis_task = session.spawn(self._drain(session), name="synthesis")

    async def _drain(self, session: ConnectionSession) -> None:
        me = asyncio.current_task()
        try:
            while session.active and session.pending_sentences:
                sentence = session.pending_sentences[0]
                if not await self._synthesize(session, sentence):
                    return
                if session.pending_sentences:
                    session.pending_sentences.popleft()
        finally:
            if session.synthesis_task is me:
                session.synthesis_task = None
                session.processing = False

    async def _synthesize(self, session: ConnectionSession, sentence: str) -> bool:
        provider = self._registry.get(Capability.SYNTHESIS)
        logger.debug("synthesizing %r connection_id=%s", sentence, session.connection_id)
        try:
            audio = await asyncio.wait_for(provider.text_to_speech(sentence, session), timeout=self._timeout_s)
        except TimeoutError:
            logger.warning(
                "synthesis timed out after %.1fs connection_id=%s",
                self._timeout_s,
                session.connection_id,
            )
            provider.cancel_tts(session)
            self._fail(session, f"synthesis timed out after {self._timeout_s:.1f}s")
            return False
        except Exception as exc:
            logger.error("synthesis failed connection_id=%s: %s", session.connection_id, exc)
            self._fail(session, str(exc))
            return False

        if not session.active:
            return False
        if not audio:
            logger.warning("synthesis returned no audio for %r connection_id=%s", sentence, session.connection_id)
            return True
        session.channel.send_bytes(audio)
        return True

    @staticmethod
    def _fail(session: ConnectionSession, details: str) -> None:
        session.pending_sentences.clear()
        session.processing = False
        if session.active:
            session.channel.send_error("TTS processing error", details=details, code=WS_ERROR_SYNTHESIS)


__all__ = ["SynthesisQueue"]
