"""Test fixtures for the URL shortener application."""

import os

# Settings are read once at import time, so the environment must be set first
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORE_BACKEND"] = "memory"
os.environ["BASE_URL"] = "https://sho.rt"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CONNECT_RETRY_ATTEMPTS"] = "1"

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shorturl.api.dependencies import get_store
from shorturl.core.redis import RedisClientManager
from shorturl.main import app as main_app
# Import models to ensure they're registered with SQLModel metadata
from shorturl.models.url import UrlMapping  # noqa: F401
from shorturl.models.setting import AppSetting  # noqa: F401
from shorturl.store.memory import InMemoryMappingStore
from shorturl.store.redis import RedisMappingStore
from shorturl.store.sql import SQLMappingStore


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest_asyncio.fixture
async def sql_store(test_engine, session_factory) -> AsyncGenerator[SQLMappingStore, None]:
    """SQL mapping store on the shared in-memory engine."""
    store = SQLMappingStore(engine=test_engine, session_factory=session_factory)
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def memory_store() -> InMemoryMappingStore:
    return InMemoryMappingStore()


class MockRedis:
    """Minimal async stand-in for the redis client used by the Redis store."""

    def __init__(self):
        self.data = {}
        self.hashes = {}
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None, nx=False):
        if nx and key in self.data:
            return None
        self.data[key] = value
        return True

    async def hget(self, name, key):
        return self.hashes.get(name, {}).get(key)

    async def hset(self, name, key, value):
        self.hashes.setdefault(name, {})[key] = value
        return 1

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


@pytest.fixture
def mock_redis() -> MockRedis:
    """Mock Redis for testing."""
    return MockRedis()


@pytest.fixture
def redis_store(mock_redis) -> RedisMappingStore:
    manager = RedisClientManager("redis://localhost:6379/0", client=mock_redis)
    return RedisMappingStore(manager, key_prefix="test")


@pytest.fixture
def test_app(memory_store) -> Generator[FastAPI, None, None]:
    """FastAPI app whose routes use the test's in-memory store."""
    app = main_app
    app.dependency_overrides[get_store] = lambda: memory_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app, follow_redirects=False) as test_client:
        yield test_client
