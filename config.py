"""
Centralised settings loader.

Values come from the environment (or a local `.env`). The JWT secret and
lifetime have no defaults: a missing value fails at startup, never mid-request.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ────────────────────────────────────────────────
    env_name: str = "local"
    database_url: str = "sqlite+aiosqlite:///./sessions.db"
    log_level: str = "info"

    # ─── session tokens ─────────────────────────────────────────────
    jwt_secret_key: str                             # base64, >= 256 bits
    jwt_expiration_time: int = Field(..., gt=0)     # milliseconds

    # unrelated vars in a shared .env or environment are ignored
    model_config = {"extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
