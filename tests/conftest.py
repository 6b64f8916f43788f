"""Common test fixtures for the notes API."""
from datetime import datetime

import pytest
from fakeredis import aioredis as fake_aioredis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core import redis_client
from app.core.database import Base, get_db
from app.core.security import create_access_token, sync_user
from main import app as fastapi_app


@pytest.fixture
async def engine():
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine, fake_redis):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def fake_redis(monkeypatch):
    """Swap the module-level Redis client for an in-process fake."""
    client = fake_aioredis.FakeRedis(decode_responses=True)
    await client.flushall()
    monkeypatch.setattr(redis_client, "redis_client", client)
    yield client
    await client.flushall()


@pytest.fixture
async def users(db_session):
    await sync_user("alice", db_session)
    await sync_user("bob", db_session)
    return "alice", "bob"


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


@pytest.fixture
def alice():
    return auth_headers("alice")


@pytest.fixture
def bob():
    return auth_headers("bob")


def note_payload(title="Note", content="Body", date=datetime(2024, 1, 1), project_id=None, tag_ids=()):
    return {
        "title": title,
        "content": content,
        "date": date.isoformat(),
        "project_id": project_id,
        "tag_ids": list(tag_ids),
    }
