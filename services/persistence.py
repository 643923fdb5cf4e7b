"""
services/persistence.py
────────────────────────────────────────────────────────────────────────
Mirror SessionState into a KeyValueStore.

* `StatePersister` listens to state changes and keeps the latest
  encoded value per key; `flush()` writes them oldest change first.
* `load_session()` is the startup read – storage trouble never blocks
  the app, it just means defaults.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from services.session_state import SessionState, encode_value
from services.storage import ALL_KEYS, KeyValueStore

_LOG = logging.getLogger(__name__)


class StatePersister:
    def __init__(self, state: SessionState, store: KeyValueStore) -> None:
        self._store = store
        # one entry per key, newest value wins; order = order of last change
        self._pending: dict[str, str | None] = {}
        self._lock = asyncio.Lock()
        self._unsubscribe = state.subscribe(self._on_change)

    def _on_change(self, key: str, value: Any) -> None:
        raw = None if value is None else encode_value(key, value)
        self._pending.pop(key, None)
        self._pending[key] = raw

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def flush(self) -> int:
        """Write queued changes; returns how many were applied."""
        written = 0
        async with self._lock:
            while self._pending:
                key = next(iter(self._pending))
                raw = self._pending.pop(key)
                try:
                    if raw is None:
                        await self._store.remove_item(key)
                    else:
                        await self._store.set_item(key, raw)
                except Exception:
                    # keep it unless a newer value was queued meanwhile
                    if key not in self._pending:
                        self._pending = {key: raw, **self._pending}
                    _LOG.exception("could not persist %s (%d writes still queued)", key, len(self._pending))
                    raise
                written += 1
        if written:
            _LOG.debug("flushed %d storage writes", written)
        return written

    def close(self) -> None:
        self._unsubscribe()


async def load_session(store: KeyValueStore) -> SessionState:
    raw: dict[str, str | None] = {}
    for key in ALL_KEYS:
        try:
            raw[key] = await store.get_item(key)
        except (SQLAlchemyError, OSError) as exc:
            _LOG.warning("storage read for %s failed, using default: %s", key, exc)
            raw[key] = None
    state = SessionState.restore(raw)
    _LOG.info(
        "session restored (authenticated=%s, profile=%s, %d messages)",
        state.is_authenticated, state.profile is not None, len(state.messages),
    )
    return state
