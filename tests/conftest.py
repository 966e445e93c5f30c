import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

from datetime import timedelta
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.core.redis import get_session_store
from app.core.security import create_access_token
from app.db import models  # noqa: F401
from app.db.session import get_session
from app.main import app


class InMemorySessionStore:
    """Stands in for redis; same interface as app.core.redis.SessionStore."""

    def __init__(self):
        self.sessions = {}

    async def save(self, token: str, data: dict, expire: int):
        self.sessions[token] = data

    async def load(self, token: str):
        return self.sessions.get(token)

    async def revoke(self, token: str) -> bool:
        return self.sessions.pop(token, None) is not None

    async def close(self):
        pass


def make_token(user_id: UUID, email: str = "doctor@example.com", expires: timedelta = timedelta(minutes=30)) -> str:
    return create_access_token({"sub": str(user_id), "email": email}, expires_delta=expires)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest_asyncio.fixture
async def client(session_factory, session_store):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_store] = lambda: session_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Register a provider token as a session and return auth headers."""

    async def _login(user_id: UUID = None, email: str = "doctor@example.com") -> dict:
        token = make_token(user_id or uuid4(), email)
        headers = {"Authorization": f"Bearer {token}"}
        res = await client.post("/api/v1/auth/session", headers=headers)
        assert res.status_code == 200, res.text
        return headers

    return _login
