"""
services/dashboard.py
────────────────────────────────────────────────────────────────────────
Wires one session: restored state + persister + chat orchestrator.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from core.nutrition_calc import NutritionalCalculator
from core.response_engine import ResponseEngine
from services.chat import ChatOrchestrator
from services.persistence import StatePersister, load_session
from services.session_state import SessionState
from services.storage import KeyValueStore

_LOG = logging.getLogger(__name__)


@dataclass
class Dashboard:
    state: SessionState
    persister: StatePersister
    chat: ChatOrchestrator
    calc: NutritionalCalculator

    async def save(self) -> bool:
        """Flush pending writes; storage trouble is logged, never raised.

        Failed writes stay queued and go out with the next save.
        """
        try:
            await self.persister.flush()
        except (SQLAlchemyError, OSError) as exc:
            _LOG.warning("storage unavailable, %d writes kept for later: %s", self.persister.pending, exc)
            return False
        return True

    async def close(self) -> None:
        try:
            await self.save()
        finally:
            self.persister.close()


async def open_dashboard(
    store: KeyValueStore,
    typing_delay_ms: tuple[float, float] = (1000, 2000),
    engine: ResponseEngine | None = None,
) -> Dashboard:
    state = await load_session(store)
    return Dashboard(
        state=state,
        persister=StatePersister(state, store),
        chat=ChatOrchestrator(state, engine, delay_ms=typing_delay_ms),
        calc=NutritionalCalculator(),
    )
