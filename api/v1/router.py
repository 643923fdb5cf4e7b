# api/v1/router.py
from fastapi import APIRouter

from . import chat, goals, profile, session

api_router = APIRouter()

api_router.include_router(session.router, prefix="/session", tags=["Session"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(goals.router,   prefix="/goals",   tags=["Goals"])
api_router.include_router(chat.router,    prefix="/chat",    tags=["Chat"])
