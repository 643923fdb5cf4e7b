"""Re-export individual schema modules for easy imports."""

from .user import ProfileIn, ProfileSave, ProfileView
from .goals import GoalsCalcIn
from .chat import MessageIn, ChatLog
from .session import LoginIn, SessionOut

__all__ = [
    "ProfileIn",
    "ProfileSave",
    "ProfileView",
    "GoalsCalcIn",
    "MessageIn",
    "ChatLog",
    "LoginIn",
    "SessionOut",
]
