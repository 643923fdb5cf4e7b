from __future__ import annotations

from pydantic import BaseModel

from core.models.chat import ChatMessage


class MessageIn(BaseModel):
    text: str


class ChatLog(BaseModel):
    messages: list[ChatMessage]
    is_typing: bool
