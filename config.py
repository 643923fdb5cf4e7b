"""
Centralised settings loader (pydantic-settings, env vars or `.env`).
"""

from __future__ import annotations
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / storage ──────────────────────────────────────────
    env_name: str = "local"
    database_url: str = "sqlite+aiosqlite:///./fittracker.db"
    storage_backend: Literal["sql", "memory"] = "sql"
    log_level: str = "INFO"

    # ─── coach "typing" delay, milliseconds, drawn from [min, max) ──
    typing_delay_min_ms: float = Field(1000, ge=0)
    typing_delay_max_ms: float = Field(2000, ge=0)

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
