"""
Pytest fixtures - in-memory database, HTTP client, users and tokens, fake Redis.
"""

import os
import tempfile

# Settings are cached on first import; pin the test environment before importing the app
os.environ.update(
    {
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "SECRET_KEY": "test-secret-key",
        "CACHE_ENABLED": "false",
        "RATE_LIMIT_ENABLED": "false",
        "UPLOAD_DIR": tempfile.mkdtemp(prefix="portfolio-uploads-"),
        "LOG_LEVEL": "WARNING",
    }
)

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from portfolio_api.cache import redis_client
from portfolio_api.core.security import create_user_token, hash_password
from portfolio_api.db.base import Base
from portfolio_api.db.models import User
from portfolio_api.db.session import get_db
from portfolio_api.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
ADMIN_PASSWORD = "admin-pass-123"


@pytest_asyncio.fixture
async def engine():
    # StaticPool: every session shares the one in-memory connection, fresh per test
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, username: str, role: str) -> User:
    user = User(
        username=username,
        password_hash=hash_password(ADMIN_PASSWORD),
        email=f"{username}@portfolio.dev",
        role=role,
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


def _bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> User:
    return await _make_user(session, "admin", "admin")


@pytest_asyncio.fixture
async def editor_user(session: AsyncSession) -> User:
    return await _make_user(session, "editor", "editor")


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return _bearer(admin_user)


@pytest.fixture
def editor_headers(editor_user: User) -> dict:
    return _bearer(editor_user)


class FakeRedis:
    """The handful of async Redis commands the app uses, backed by a dict."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.pipeline_executions = 0

    async def get(self, key):
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def incr(self, key):
        value = int(self.store.get(key, 0)) + 1
        self.store[key] = str(value)
        return value

    async def expire(self, key, seconds, nx=False):
        if nx and key in self.ttls:
            return False
        self.ttls[key] = seconds
        return True

    def pipeline(self, transaction=True):
        return FakePipeline(self)


class FakePipeline:
    """Queues commands and runs them against FakeRedis on execute(), like redis.asyncio pipelines."""

    def __init__(self, redis: FakeRedis):
        self.redis = redis
        self.commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.commands = []

    def __getattr__(self, name):
        command = getattr(self.redis, name)

        def queue(*args, **kwargs):
            self.commands.append((command, args, kwargs))
            return self

        return queue

    async def execute(self):
        self.redis.pipeline_executions += 1
        results = [await command(*args, **kwargs) for command, args, kwargs in self.commands]
        self.commands = []
        return results


@pytest.fixture
def fake_redis(monkeypatch) -> FakeRedis:
    fake = FakeRedis()

    async def _get_redis():
        return fake

    monkeypatch.setattr(redis_client, "get_redis", _get_redis)
    return fake


@pytest.fixture
def admin_credentials(admin_user: User) -> dict:
    return {"username": admin_user.username, "password": ADMIN_PASSWORD}
