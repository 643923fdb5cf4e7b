"""
services/storage.py
────────────────────────────────────────────────────────────────────────
Opaque key/value stores behind one async interface:

    MemoryStore – plain dict, tests and `STORAGE_BACKEND=memory`
    SqlStore    – `client_storage` table through async SQLAlchemy
"""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from services.db import ClientStorage

_LOG = logging.getLogger(__name__)

# persistence keys, same names the browser build used
KEY_AUTH = "isAuthenticated"
KEY_PROFILE = "userProfile"
KEY_GOALS = "nutritionGoals"
KEY_MESSAGES = "chatMessages"
ALL_KEYS = (KEY_AUTH, KEY_PROFILE, KEY_GOALS, KEY_MESSAGES)


class KeyValueStore(Protocol):
    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self.data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    async def remove_item(self, key: str) -> None:
        self.data.pop(key, None)


class SqlStore:
    def __init__(self, eng: AsyncEngine) -> None:
        self._sessions = async_sessionmaker(eng, expire_on_commit=False)

    async def get_item(self, key: str) -> str | None:
        async with self._sessions() as db:
            row = await db.get(ClientStorage, key)
            return row.value if row else None

    async def set_item(self, key: str, value: str) -> None:
        async with self._sessions() as db:
            row = await db.get(ClientStorage, key)
            if row is None:
                db.add(ClientStorage(key=key, value=value))
            else:
                row.value = value
            await db.commit()
        _LOG.debug("stored %s (%d chars)", key, len(value))

    async def remove_item(self, key: str) -> None:
        async with self._sessions() as db:
            row = await db.get(ClientStorage, key)
            if row is not None:
                await db.delete(row)
                await db.commit()
