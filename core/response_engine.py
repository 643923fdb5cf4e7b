"""
core/response_engine.py
────────────────────────────────────────────────────────────────────────
Scripted "coach" replies.

Keyword rules are checked in order against the lower-cased message and
the first hit wins:

    tired / exhausted       → rest message (fixed)
    good / great / awesome  → one of the motivational lines
    help / advice           → support message (fixed)
    goal / target           → goal message (fixed)
    anything else           → default pool (motivational lines plus
                              motivational-line + follow-up question)

Randomness is injected so callers can pin the picks.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol, Sequence

_LOG = logging.getLogger(__name__)

REST_MESSAGE = (
    "Rest is just as important as activity! Listen to your body and get "
    "the recovery you need. 💤"
)
SUPPORT_MESSAGE = (
    "I'm here to support you! Remember: progress over perfection. Focus on "
    "building healthy habits one day at a time! 🌱"
)
GOAL_MESSAGE = (
    "Goals are dreams with deadlines! Break them down into smaller, "
    "achievable steps. You're closer than you think! 🎯"
)

MOTIVATIONAL_RESPONSES: tuple[str, ...] = (
    "That's amazing! Keep up the great work! 💪",
    "You're doing fantastic! Every step forward is progress! 🌟",
    "I believe in you! Your dedication will pay off! 🚀",
    "That's the spirit! You're stronger than you think! 💯",
    "Awesome progress! Remember, consistency is key! 🎯",
    "You're on fire! Keep that momentum going! 🔥",
    "Great mindset! Small steps lead to big changes! ✨",
    "You've got this! Your future self will thank you! 🙌",
)

FOLLOW_UP_QUESTIONS: tuple[str, ...] = (
    "How was your workout today?",
    "What's your favorite healthy meal?",
    "How are you feeling about your progress?",
    "What motivates you to stay active?",
    "Any challenges you're facing this week?",
)


class IndexSource(Protocol):
    """Anything with a uniform ``randrange(stop)``; ``random.Random`` fits."""

    def randrange(self, stop: int) -> int: ...


class ResponseEngine:
    def __init__(self, rng: IndexSource | None = None) -> None:
        self._rng = rng or random.Random()

    def _pick(self, pool: Sequence[str]) -> str:
        return pool[self._rng.randrange(len(pool))]

    def default_pool(self) -> list[str]:
        """8 motivational lines + 5 "<random line> <question>" combos."""
        combos = [f"{self._pick(MOTIVATIONAL_RESPONSES)} {q}" for q in FOLLOW_UP_QUESTIONS]
        return [*MOTIVATIONAL_RESPONSES, *combos]

    def respond(self, user_text: str) -> str:
        text = user_text.lower()

        if "tired" in text or "exhausted" in text:
            rule = "rest"
            reply = REST_MESSAGE
        elif "good" in text or "great" in text or "awesome" in text:
            rule = "motivation"
            reply = self._pick(MOTIVATIONAL_RESPONSES)
        elif "help" in text or "advice" in text:
            rule = "support"
            reply = SUPPORT_MESSAGE
        elif "goal" in text or "target" in text:
            rule = "goal"
            reply = GOAL_MESSAGE
        else:
            rule = "default"
            reply = self._pick(self.default_pool())

        _LOG.debug("coach rule=%s", rule)
        return reply
