from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from api.v1.deps import require_login
from api.v1.schemas import ChatLog, MessageIn
from core.models.chat import ChatMessage
from services.chat import EmptyMessage, ReplyPending
from services.dashboard import Dashboard

router = APIRouter()
_LOG = logging.getLogger(__name__)


async def _deliver_reply(dash: Dashboard, text: str) -> None:
    await dash.chat.reply(text)
    await dash.save()


@router.get("/messages", response_model=ChatLog)
async def list_messages(dash: Dashboard = Depends(require_login)) -> ChatLog:
    return ChatLog(messages=list(dash.state.messages), is_typing=dash.state.is_typing)


@router.post(
    "/messages",
    response_model=ChatMessage,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Post a message; the coach's answer is appended shortly after",
)
async def post_message(
    body: MessageIn,
    background: BackgroundTasks,
    dash: Dashboard = Depends(require_login),
) -> ChatMessage:
    try:
        msg = dash.chat.submit(body.text)
    except EmptyMessage as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ReplyPending as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    # scheduled before saving so is_typing is always cleared
    background.add_task(_deliver_reply, dash, body.text)
    await dash.save()
    _LOG.debug("queued coach reply for message %s", msg.id)
    return msg
