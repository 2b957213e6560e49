"""
Shared fixtures. Env vars are set before any app module is imported because
`config.settings` is built at import time.
"""
from __future__ import annotations

import asyncio
import base64
import os
from datetime import datetime, timezone

TEST_KEY = b"0123456789abcdef0123456789abcdef"      # 256 bits
TEST_SECRET = base64.b64encode(TEST_KEY).decode()

os.environ.setdefault("JWT_SECRET_KEY", TEST_SECRET)
os.environ.setdefault("JWT_EXPIRATION_TIME", "3600000")   # 1 h
os.environ.setdefault("ENV_NAME", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from main import app
from services.db import get_session, init_models


class FakeClock:
    """Callable clock the token service can be pinned to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0, 500_000, tzinfo=timezone.utc))


@pytest.fixture
def client(tmp_path):
    # NullPool: every request loop opens its own aiosqlite connection
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(init_models(eng))
    maker = async_sessionmaker(eng, expire_on_commit=False)

    async def _session():
        async with maker() as session:
            yield session

    app.dependency_overrides[get_session] = _session
    yield TestClient(app)
    app.dependency_overrides.clear()
    asyncio.run(eng.dispose())
