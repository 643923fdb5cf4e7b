# tests/test_chat.py
from __future__ import annotations

import asyncio
import random

import pytest

from core.response_engine import MOTIVATIONAL_RESPONSES, REST_MESSAGE, ResponseEngine
from services.chat import ChatOrchestrator, EmptyMessage, ReplyPending
from services.session_state import SessionState


def _instant(state: SessionState) -> ChatOrchestrator:
    return ChatOrchestrator(state, ResponseEngine(random.Random(7)), delay_ms=(0, 0))


# ── delay ────────────────────────────────────────────────────────────
def test_delay_range():
    chat = ChatOrchestrator(SessionState(), rng=random.Random(3))
    delays = [chat.next_delay() for _ in range(500)]
    assert all(1.0 <= d < 2.0 for d in delays)
    assert max(delays) - min(delays) > 0.5


def test_bad_delay_range_rejected():
    with pytest.raises(ValueError):
        ChatOrchestrator(SessionState(), delay_ms=(2000, 1000))


# ── submit ───────────────────────────────────────────────────────────
def test_submit_appends_user_message_immediately():
    state = SessionState()
    msg = _instant(state).submit("Feeling tired")
    assert state.messages[-1] == msg
    assert msg.sender == "user"
    assert msg.text == "Feeling tired"
    assert state.is_typing


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_messages_rejected(text):
    state = SessionState()
    with pytest.raises(EmptyMessage):
        _instant(state).submit(text)
    assert len(state.messages) == 1


def test_second_submit_while_typing_rejected():
    state = SessionState()
    chat = _instant(state)
    chat.submit("one")
    with pytest.raises(ReplyPending):
        chat.submit("two")


# ── reply ────────────────────────────────────────────────────────────
def test_converse_appends_pair_in_order():
    state = SessionState()
    chat = _instant(state)

    user_msg, bot_msg = asyncio.run(chat.converse("I'm so TIRED today"))

    assert state.messages[-2:] == (user_msg, bot_msg)
    assert bot_msg.sender == "bot"
    assert bot_msg.text == REST_MESSAGE
    assert not state.is_typing
    assert user_msg.id != bot_msg.id


def test_many_exchanges_preserve_order():
    state = SessionState()
    chat = _instant(state)

    async def talk():
        for i in range(5):
            await chat.converse(f"great session #{i}")

    asyncio.run(talk())
    texts = [m.text for m in state.messages[1:]]
    assert texts[0::2] == [f"great session #{i}" for i in range(5)]
    assert all(t in MOTIVATIONAL_RESPONSES for t in texts[1::2])


def test_cancelled_reply_is_dropped():
    state = SessionState()
    chat = ChatOrchestrator(state, delay_ms=(5000, 5000))

    async def scenario():
        chat.submit("hello")
        task = asyncio.create_task(chat.reply("hello"))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert [m.sender for m in state.messages] == ["bot", "user"]
    assert not state.is_typing
