from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Sender = Literal["user", "bot"]

WELCOME_TEXT = (
    "Welcome to your fitness journey! I'm here to help you stay motivated "
    "and reach your goals. How are you feeling today?"
)


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    id: str = Field(default_factory=_new_id)
    text: str
    sender: Sender
    timestamp: datetime = Field(default_factory=_now)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_user(cls, text: str) -> "ChatMessage":
        return cls(text=text, sender="user")

    @classmethod
    def from_bot(cls, text: str) -> "ChatMessage":
        return cls(text=text, sender="bot")


def welcome_message() -> ChatMessage:
    return ChatMessage.from_bot(WELCOME_TEXT)
