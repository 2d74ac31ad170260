"""Streams a reply from the generation provider and feeds sentences to synthesis."""

from __future__ import annotations

import asyncio
import logging

from src.state.session import ConnectionSession
from src.providers.capability import Capability
from src.providers.registry import ProviderRegistry
from src.config.conversation import SENTENCE_TERMINATOR_PATTERN
from src.config.websocket import WS_MSG_LLM_RESPONSE, WS_ERROR_GENERATION

from .handle import GenerationHandle
from .segmenter import SentenceSegmenter
from .synthesis import SynthesisQueue
from .interruption import InterruptionController

logger = logging.getLogger(__name__)


class GenerationStreamCoordinator:
    def __init__(
        self,
        *,
        registry: ProviderRegistry,
        interruption: InterruptionController,
        synthesis: SynthesisQueue,
        sentence_pattern: str = SENTENCE_TERMINATOR_PATTERN,
    ) -> None:
        self._registry = registry
        self._interruption = interruption
        self._synthesis = synthesis
        self._sentence_pattern = sentence_pattern

    async def process_input(self, text: str, session: ConnectionSession) -> str | None:
        """Run one conversational turn for ``text``.

        Returns the reply text (possibly partial if superseded), or None when the
        turn could not start or failed.
        """
        text = (text or "").strip()
        if not text or not session.active:
            return None

        # A new turn supersedes whatever the previous one is still doing.
        self._interruption.cancel(session, notify_client=False)
        session.history.add_user(text)
        session.interrupt_notified = False
        session.generation_turn += 1
        turn = session.generation_turn

        provider = self._registry.get(Capability.GENERATION)
        try:
            stream = await provider.stream_reply(session.history.as_messages())
        except Exception as exc:
            if session.generation_turn != turn:
                logger.debug("superseded turn failed to open connection_id=%s: %s", session.connection_id, exc)
                return None
            self._report_failure(session, exc)
            return None

        handle = GenerationHandle(stream, connection_id=session.connection_id)
        if session.generation_turn != turn or not session.active:
            # A newer turn or an interrupt arrived while this stream was opening.
            logger.debug("discarding stream of superseded turn connection_id=%s", session.connection_id)
            await handle.aclose()
            return None
        session.generation_handle = handle
        try:
            return await self._consume(handle, session)
        except asyncio.CancelledError:
            logger.debug("generation task cancelled connection_id=%s", session.connection_id)
            handle.cancel()
            raise
        except Exception as exc:
            if handle.cancelled or session.generation_handle is not handle:
                logger.debug("generation aborted connection_id=%s: %s", session.connection_id, exc)
                return None
            self._report_failure(session, exc)
            return None
        finally:
            if session.generation_handle is handle:
                session.generation_handle = None

    async def _consume(self, handle: GenerationHandle, session: ConnectionSession) -> str:
        segmenter = SentenceSegmenter(self._sentence_pattern)
        response = ""
        async for chunk in handle:
            if session.generation_handle is not handle or not session.active:
                logger.debug("generation superseded connection_id=%s", session.connection_id)
                return response
            if not chunk:
                continue
            response += chunk
            session.channel.send_json(WS_MSG_LLM_RESPONSE, response)
            sentence = segmenter.feed(chunk)
            if sentence is not None:
                self._synthesis.enqueue(session, sentence)

        if session.generation_handle is not handle or not session.active:
            return response

        remainder = segmenter.flush()
        if remainder is not None:
            self._synthesis.enqueue(session, remainder)
        if response:
            session.history.add_assistant(response)
        logger.info("reply complete chars=%s connection_id=%s", len(response), session.connection_id)
        return response

    def _report_failure(self, session: ConnectionSession, exc: Exception) -> None:
        # The partial reply is dropped, so sentences of it still queued are too;
        # the user turn stays in history.
        logger.error("generation failed connection_id=%s: %s", session.connection_id, exc)
        self._interruption.cancel(session, notify_client=False)
        if session.active:
            session.channel.send_error("LLM processing error", details=str(exc), code=WS_ERROR_GENERATION)


__all__ = ["GenerationStreamCoordinator"]
