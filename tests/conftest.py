"""Shared test fixtures: async DB, record stores, client, auth helpers, factories.

Uses SQLite + aiosqlite in memory so every test gets an isolated store.
"""

from __future__ import annotations

import os

# Required settings must exist before any import touches pydantic-settings
os.environ.setdefault("JWT_SECRET", "test-secret-for-ci-do-not-use-in-production")
os.environ.setdefault("RECORD_STORE_PROJECT_ID", "test-project")
os.environ.setdefault("RECORD_STORE_PUBLIC_KEY", "test-public-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import date, datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from staffsphere.common.exceptions import RecordStoreError
from staffsphere.common.rate_limit import limiter
from staffsphere.config import settings
from staffsphere.database import create_tables, make_session_factory
from staffsphere.main import create_app
from staffsphere.notifications.service import ToastQueue
from staffsphere.shell.provider import TokenAuthProvider
from staffsphere.store.base import ListQuery, ListResult, RecordStore
from staffsphere.store.sql import SqlRecordStore

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ── Test database (SQLite in-memory) ────────────────────────────────

@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return make_session_factory(engine)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    limiter.reset()
    yield


# ── Record stores ───────────────────────────────────────────────────

class RecordingStore(RecordStore):
    """Wraps a real store, recording every call; selected calls can be made to fail."""

    def __init__(self, inner: RecordStore) -> None:
        self.inner = inner
        self.calls: list[tuple[str, str, Any]] = []
        self._failures: set[tuple[str, Optional[str]]] = set()

    def fail(self, operation: str, collection: Optional[str] = None) -> None:
        """Make *operation* raise ``RecordStoreError`` (for *collection*, or any)."""
        self._failures.add((operation, collection))

    def calls_for(self, operation: Optional[str] = None) -> list[tuple[str, str, Any]]:
        return [call for call in self.calls if operation is None or call[0] == operation]

    def mutations(self) -> list[tuple[str, str]]:
        return [(op, collection) for op, collection, _ in self.calls if op != "list"]

    def _check(self, operation: str, collection: str, payload: Any) -> None:
        self.calls.append((operation, collection, payload))
        if (operation, None) in self._failures or (operation, collection) in self._failures:
            raise RecordStoreError(f"Simulated {operation} failure on {collection}.")

    async def list(self, collection: str, query: ListQuery) -> ListResult:
        self._check("list", collection, query)
        return await self.inner.list(collection, query)

    async def create(self, collection: str, fields: dict[str, Any]) -> int:
        self._check("create", collection, dict(fields))
        return await self.inner.create(collection, fields)

    async def update(self, collection: str, record_id: int, fields: dict[str, Any]) -> None:
        self._check("update", collection, {"id": record_id, **fields})
        await self.inner.update(collection, record_id, fields)

    async def delete(self, collection: str, record_ids: list[int]) -> None:
        self._check("delete", collection, list(record_ids))
        await self.inner.delete(collection, record_ids)


@pytest.fixture
def sql_store(session_factory) -> SqlRecordStore:
    return SqlRecordStore(session_factory)


@pytest.fixture
def store(sql_store) -> RecordingStore:
    return RecordingStore(sql_store)


@pytest.fixture
def toasts() -> ToastQueue:
    return ToastQueue()


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
def provider() -> TokenAuthProvider:
    return TokenAuthProvider(settings.JWT_SECRET, settings.JWT_ALGORITHM)


@pytest.fixture
async def app(engine, store, provider):
    """Fresh app (one page load) wired to the test database and recording store."""
    application = create_app(engine=engine, record_store=store, provider=provider)
    yield application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def signed_in(client) -> dict:
    """Complete an authenticated callback on the home page."""
    response = await client.post(
        "/api/v1/session/callback",
        json={"location": "/", "token": create_identity_token()},
    )
    assert response.status_code == 200
    return response.json()


# ── Auth helpers ────────────────────────────────────────────────────

def create_identity_token(
    user_id: str = "user-1",
    *,
    name: str = "Test User",
    email: str = "test.user@staffsphere.app",
    expired: bool = False,
    secret: Optional[str] = None,
) -> str:
    """Generate a signed identity token for testing."""
    if expired:
        exp = datetime.now(timezone.utc) - timedelta(hours=1)
    else:
        exp = datetime.now(timezone.utc) + timedelta(hours=1)
    payload = {"sub": user_id, "name": name, "email": email, "exp": exp}
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


# ── Record factories ────────────────────────────────────────────────

def _make_employee(**overrides: Any) -> dict[str, Any]:
    data = dict(
        name="Alex Morgan",
        email="alex.morgan@staffsphere.app",
        phone="+1 555 0100",
        department="Engineering",
        position="Backend Developer",
        join_date=date(2023, 3, 1).isoformat(),
        status="active",
    )
    data.update(overrides)
    return data


def _make_activity(**overrides: Any) -> dict[str, Any]:
    data = dict(
        action="completed training",
        time=datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc).isoformat(),
        status="completed",
        activity_type="general",
        user=None,
    )
    data.update(overrides)
    return data


def _make_department_stat(**overrides: Any) -> dict[str, Any]:
    data = dict(title="Total Employees", value=42, icon="users", color="bg-blue-500", increase="+4%")
    data.update(overrides)
    return data


async def seed_employee(store: RecordStore, **overrides: Any) -> int:
    return await store.create("employees", _make_employee(**overrides))


async def seed_activity(store: RecordStore, **overrides: Any) -> int:
    return await store.create("activities", _make_activity(**overrides))


async def seed_department_stat(store: RecordStore, **overrides: Any) -> int:
    return await store.create("department_stats", _make_department_stat(**overrides))
