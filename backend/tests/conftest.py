# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Environment is set BEFORE importing geosearch, because geosearch.core.config
# builds its settings at import time. No live database is needed: the pool is
# replaced with in-memory fakes through FastAPI dependency overrides.
# =============================================================================

import asyncio
import os
from contextlib import asynccontextmanager

os.environ.setdefault("LOGGER", "30")
os.environ.setdefault("DB_PASSWORD", "test-password")
os.environ.setdefault("STATIC_DIR", "__no_static_dir__")

import pytest
from fastapi.testclient import TestClient

from geosearch.core.db_connection import get_pool
from geosearch.main import app


class FakeConnection:
    """Stands in for an asyncpg connection; records every fetchval call."""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []
        self.closed = False

    async def fetchval(self, sql, *args, timeout=None):
        self.calls.append((sql, args))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self):
        self.closed = True


class FakePool:
    def __init__(self, conn: FakeConnection):
        self.conn = conn
        self.acquired = 0
        self.closed = False

    @asynccontextmanager
    async def _acquire(self):
        self.acquired += 1
        yield self.conn

    def acquire(self, timeout=None):
        return self._acquire()

    async def fetchval(self, sql, *args, timeout=None):
        return await self.conn.fetchval(sql, *args, timeout=timeout)

    async def close(self):
        self.closed = True


SAMPLE_FEATURES = (
    '[{"type": "Feature", "geometry": {"type": "Point", "coordinates": [-97.7431, 30.2672]}, '
    '"properties": {"name": "Downtown Drop-off", "distance_km": 0.31}}, '
    '{"type": "Feature", "geometry": {"type": "Point", "coordinates": [-97.75, 30.28]}, '
    '"properties": {"name": "North Depot", "distance_km": 1.72}}]'
)


@pytest.fixture
def fake_conn():
    return FakeConnection(result=SAMPLE_FEATURES)


@pytest.fixture
def fake_pool(fake_conn):
    return FakePool(fake_conn)


@pytest.fixture
def client(fake_pool):
    """TestClient without lifespan, so no real pool is opened."""
    app.dependency_overrides[get_pool] = lambda: fake_pool
    yield TestClient(app)
    app.dependency_overrides.clear()
