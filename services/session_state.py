"""
services/session_state.py
────────────────────────────────────────────────────────────────────────
In-memory dashboard state (auth flag, profile, goals, conversation).

Mutators replace values wholesale and tell every subscriber which
storage key changed:  listener(key, new_value)  with new_value None
meaning "remove".  Writing to storage is somebody else's job
(see services/persistence.py).
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from pydantic import TypeAdapter, ValidationError

from core.models.chat import ChatMessage, welcome_message
from core.models.user import NutritionGoals, Profile
from services.storage import KEY_AUTH, KEY_GOALS, KEY_MESSAGES, KEY_PROFILE

_LOG = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]

_MESSAGES = TypeAdapter(list[ChatMessage])


# ───────────────────────── codec ────────────────────────────
def encode_value(key: str, value: Any) -> str:
    """Serialise a state value for the key/value store."""
    if key == KEY_AUTH:
        return "true" if value else "false"
    if key == KEY_PROFILE:
        return value.model_dump_json(by_alias=True)
    if key == KEY_GOALS:
        return value.model_dump_json()
    if key == KEY_MESSAGES:
        return _MESSAGES.dump_json(list(value)).decode("utf-8")
    raise KeyError(key)


def _decode(key: str, raw: str | None, parse: Callable[[str], Any]) -> Any:
    if raw is None:
        return None
    try:
        return parse(raw)
    except ValidationError as exc:
        _LOG.warning("ignoring unreadable %s in storage (%d errors)", key, exc.error_count())
        return None


# ───────────────────────── state ────────────────────────────
class SessionState:
    def __init__(
        self,
        *,
        is_authenticated: bool = False,
        profile: Profile | None = None,
        nutrition_goals: NutritionGoals | None = None,
        messages: list[ChatMessage] | None = None,
    ) -> None:
        self._auth = is_authenticated
        self._profile = profile
        self._goals = nutrition_goals or NutritionGoals()
        self._messages: list[ChatMessage] = (
            list(messages) if messages is not None else [welcome_message()]
        )
        self._listeners: list[Listener] = []
        self.is_typing = False

    @classmethod
    def restore(cls, raw: Mapping[str, str | None]) -> "SessionState":
        """Rebuild from stored strings; bad or missing entries mean defaults."""
        return cls(
            is_authenticated=raw.get(KEY_AUTH) == "true",
            profile=_decode(KEY_PROFILE, raw.get(KEY_PROFILE), Profile.model_validate_json),
            nutrition_goals=_decode(KEY_GOALS, raw.get(KEY_GOALS), NutritionGoals.model_validate_json),
            messages=_decode(KEY_MESSAGES, raw.get(KEY_MESSAGES), _MESSAGES.validate_json),
        )

    # ---------------- read side -------------------------------------
    @property
    def is_authenticated(self) -> bool:
        return self._auth

    @property
    def profile(self) -> Profile | None:
        return self._profile

    @property
    def nutrition_goals(self) -> NutritionGoals:
        return self._goals

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    # ---------------- observers -------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, key: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(key, value)

    # ---------------- mutators --------------------------------------
    def login(self, email: str) -> None:
        # placeholder auth: nothing is checked against anything
        self._auth = True
        _LOG.info("session opened for %s", email)
        self._emit(KEY_AUTH, True)

    def logout(self) -> None:
        self._auth = False
        self._profile = None
        _LOG.info("session closed")
        self._emit(KEY_AUTH, None)
        self._emit(KEY_PROFILE, None)

    def update_profile(self, profile: Profile) -> None:
        self._profile = profile
        self._emit(KEY_PROFILE, profile)

    def update_nutrition_goals(self, goals: NutritionGoals) -> None:
        self._goals = goals
        self._emit(KEY_GOALS, goals)

    def add_chat_message(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self._emit(KEY_MESSAGES, self.messages)
