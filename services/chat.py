"""
services/chat.py
────────────────────────────────────────────────────────────────────────
User message goes into the log right away; the coach answers after a
short random "typing" pause.  Only one reply can be pending at a time.
"""
from __future__ import annotations

import asyncio
import logging
import random

from core.models.chat import ChatMessage
from core.response_engine import ResponseEngine
from services.session_state import SessionState

_LOG = logging.getLogger(__name__)


class EmptyMessage(ValueError):
    pass


class ReplyPending(RuntimeError):
    pass


class ChatOrchestrator:
    def __init__(
        self,
        state: SessionState,
        engine: ResponseEngine | None = None,
        delay_ms: tuple[float, float] = (1000, 2000),
        rng: random.Random | None = None,
    ) -> None:
        lo, hi = delay_ms
        if lo < 0 or hi < lo:
            raise ValueError(f"bad typing delay range {delay_ms!r}")
        self._state = state
        self._engine = engine or ResponseEngine()
        self._delay_ms = (lo, hi)
        self._rng = rng or random.Random()

    def next_delay(self) -> float:
        """Seconds to wait, uniform over [min, max) milliseconds."""
        lo, hi = self._delay_ms
        return (lo + self._rng.random() * (hi - lo)) / 1000

    def submit(self, text: str) -> ChatMessage:
        if not text.strip():
            raise EmptyMessage("message is empty")
        if self._state.is_typing:
            raise ReplyPending("coach is still answering the previous message")

        msg = ChatMessage.from_user(text)
        self._state.add_chat_message(msg)
        self._state.is_typing = True
        return msg

    async def reply(self, text: str) -> ChatMessage:
        """Wait out the typing pause, then log and return the coach's answer.

        If the surrounding task is cancelled while waiting the answer is
        simply never written.
        """
        try:
            await asyncio.sleep(self.next_delay())
            msg = ChatMessage.from_bot(self._engine.respond(text))
            self._state.add_chat_message(msg)
            return msg
        except asyncio.CancelledError:
            _LOG.info("pending coach reply dropped")
            raise
        finally:
            self._state.is_typing = False

    async def converse(self, text: str) -> tuple[ChatMessage, ChatMessage]:
        user_msg = self.submit(text)
        return user_msg, await self.reply(text)
