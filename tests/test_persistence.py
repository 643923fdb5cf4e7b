# tests/test_persistence.py
from __future__ import annotations

import asyncio
import json

import pytest
from sqlalchemy.exc import OperationalError

from core.models.chat import ChatMessage
from core.models.user import NutritionGoals, Profile
from services.dashboard import open_dashboard
from services.db import init_models, make_engine
from services.persistence import StatePersister, load_session
from services.storage import (
    ALL_KEYS,
    KEY_AUTH,
    KEY_GOALS,
    KEY_MESSAGES,
    KEY_PROFILE,
    MemoryStore,
    SqlStore,
)

PROFILE = Profile(
    name="Lee",
    email="lee@example.com",
    age=45,
    weight=88,
    height=180,
    activity_level="light",
)
GOALS = NutritionGoals(calories="2400", protein="194g", fat="67g", carbs="258g")


class BrokenStore(MemoryStore):
    async def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")


class SwitchableStore(MemoryStore):
    """Writes fail while `down` is set."""

    down = False

    async def set_item(self, key: str, value: str) -> None:
        if self.down:
            raise OSError("disk full")
        await super().set_item(key, value)


class UnreadableStore(MemoryStore):
    def __init__(self, exc: Exception) -> None:
        super().__init__({KEY_AUTH: "true"})
        self.exc = exc

    async def get_item(self, key: str) -> str | None:
        raise self.exc


# ── memory store ─────────────────────────────────────────────────────
def test_changes_reach_store_only_on_flush():
    async def scenario():
        store = MemoryStore()
        state = await load_session(store)
        persister = StatePersister(state, store)

        state.login("lee@example.com")
        state.update_profile(PROFILE)
        assert store.data == {}
        assert persister.pending == 2

        assert await persister.flush() == 2
        return store

    store = asyncio.run(scenario())
    assert store.data[KEY_AUTH] == "true"
    assert json.loads(store.data[KEY_PROFILE])["activityLevel"] == "light"


def test_logout_removes_keys():
    async def scenario():
        store = MemoryStore()
        state = await load_session(store)
        persister = StatePersister(state, store)
        state.login("lee@example.com")
        state.update_profile(PROFILE)
        state.update_nutrition_goals(GOALS)
        await persister.flush()
        state.logout()
        await persister.flush()
        return store

    store = asyncio.run(scenario())
    assert KEY_AUTH not in store.data
    assert KEY_PROFILE not in store.data
    assert KEY_GOALS in store.data


def test_reload_restores_everything():
    async def scenario():
        store = MemoryStore()
        state = await load_session(store)
        persister = StatePersister(state, store)
        state.login("lee@example.com")
        state.update_profile(PROFILE)
        state.update_nutrition_goals(GOALS)
        state.add_chat_message(ChatMessage.from_user("feeling great"))
        state.add_chat_message(ChatMessage.from_bot("You're on fire! Keep that momentum going! 🔥"))
        await persister.flush()
        return state, await load_session(store)

    before, after = asyncio.run(scenario())
    assert after.is_authenticated
    assert after.profile == PROFILE
    assert after.nutrition_goals == GOALS
    assert after.messages == before.messages


def test_failed_write_stays_queued():
    async def scenario():
        store = BrokenStore()
        state = await load_session(store)
        persister = StatePersister(state, store)
        state.update_nutrition_goals(GOALS)
        with pytest.raises(OSError):
            await persister.flush()
        return persister

    persister = asyncio.run(scenario())
    assert persister.pending == 1


def test_corrupt_store_falls_back_to_defaults():
    store = MemoryStore({KEY_PROFILE: "][", KEY_MESSAGES: "null", KEY_AUTH: "true"})
    state = asyncio.run(load_session(store))
    assert state.is_authenticated
    assert state.profile is None
    assert len(state.messages) == 1


def test_pending_writes_merge_per_key():
    async def scenario():
        store = SwitchableStore()
        state = await load_session(store)
        persister = StatePersister(state, store)
        store.down = True

        for i in range(50):
            state.add_chat_message(ChatMessage.from_user(f"msg {i}"))
            state.update_nutrition_goals(NutritionGoals(calories=str(2000 + i)))
            with pytest.raises(OSError):
                await persister.flush()
            assert persister.pending <= len(ALL_KEYS)

        store.down = False
        written = await persister.flush()
        return store, state, written

    store, state, written = asyncio.run(scenario())
    assert written == 2
    assert json.loads(store.data[KEY_GOALS])["calories"] == "2049"
    stored = json.loads(store.data[KEY_MESSAGES])
    assert [m["text"] for m in stored] == [m.text for m in state.messages]


def test_newest_value_wins_for_a_key():
    async def scenario():
        store = MemoryStore({KEY_AUTH: "true"})
        state = await load_session(store)
        persister = StatePersister(state, store)
        state.logout()
        state.login("lee@example.com")
        state.logout()
        assert persister.pending == 2
        await persister.flush()
        return store

    store = asyncio.run(scenario())
    assert KEY_AUTH not in store.data


@pytest.mark.parametrize(
    "exc",
    [OSError("no such file"), OperationalError("SELECT value", {}, Exception("database is locked"))],
)
def test_unreadable_store_falls_back_to_defaults(exc):
    state = asyncio.run(load_session(UnreadableStore(exc)))
    assert not state.is_authenticated
    assert state.profile is None
    assert state.nutrition_goals == NutritionGoals()
    assert len(state.messages) == 1


# ── dashboard save / close ───────────────────────────────────────────
def test_dashboard_save_keeps_failed_writes_queued():
    async def scenario():
        store = SwitchableStore()
        dash = await open_dashboard(store, typing_delay_ms=(0, 0))
        store.down = True
        dash.state.update_profile(PROFILE)
        first = await dash.save()
        queued = dash.persister.pending
        store.down = False
        second = await dash.save()
        return store, first, queued, second

    store, first, queued, second = asyncio.run(scenario())
    assert (first, queued, second) == (False, 1, True)
    assert json.loads(store.data[KEY_PROFILE])["name"] == "Lee"


def test_dashboard_close_survives_broken_store():
    async def scenario():
        store = BrokenStore()
        dash = await open_dashboard(store, typing_delay_ms=(0, 0))
        dash.state.update_nutrition_goals(GOALS)
        await dash.close()
        # unsubscribed: later changes are no longer queued
        dash.state.update_nutrition_goals(NutritionGoals())
        return dash

    dash = asyncio.run(scenario())
    assert dash.persister.pending == 1


# ── SQL store (sqlite file) ──────────────────────────────────────────
def test_sql_store_round_trip(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}"

    async def scenario():
        eng = make_engine(url)
        try:
            await init_models(eng)
            store = SqlStore(eng)
            assert await store.get_item(KEY_GOALS) is None

            await store.set_item(KEY_GOALS, "a")
            await store.set_item(KEY_GOALS, "b")
            first = await store.get_item(KEY_GOALS)

            await store.remove_item(KEY_GOALS)
            await store.remove_item(KEY_GOALS)
            return first, await store.get_item(KEY_GOALS)
        finally:
            await eng.dispose()

    assert asyncio.run(scenario()) == ("b", None)


def test_sql_backed_session_survives_restart(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'kv.db'}"

    async def write():
        eng = make_engine(url)
        await init_models(eng)
        store = SqlStore(eng)
        state = await load_session(store)
        persister = StatePersister(state, store)
        state.login("lee@example.com")
        state.update_profile(PROFILE)
        await persister.flush()
        await eng.dispose()

    async def read():
        eng = make_engine(url)
        state = await load_session(SqlStore(eng))
        await eng.dispose()
        return state

    asyncio.run(write())
    state = asyncio.run(read())
    assert state.is_authenticated
    assert state.profile == PROFILE
