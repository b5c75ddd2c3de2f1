"""Route test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden with a session manager bound to the test engine,
      so store errors go through the same translation as in production
    - register() signs users up through the real endpoint, so tokens are genuine

Design Decisions:
    - SQLite in-memory: fast, no external dependency; JSON columns behave the same
      for the embedded lists these routes use
    - Lifespan does not run under ASGITransport, so init_db is never called here
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import devconnector.models  # noqa: F401
from devconnector.db.base import Base
from devconnector.infrastructure.database import DatabaseSessionManager, get_db
from devconnector.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine):
    """FastAPI test client with DB dependency overridden."""
    manager = DatabaseSessionManager.from_engine(test_engine)

    async def override_get_db():
        async with manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Sign a user up and return auth headers for them."""
    async def _register(
        name: str = "Ada Lovelace",
        email: str = "ada@devconnector.io",
        password: str = "secret123",
    ) -> dict:
        res = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        return {"x-auth-token": res.json()["token"]}

    return _register


@pytest.fixture
async def ada(register):
    return await register()


@pytest.fixture
async def bob(register):
    return await register(name="Bob", email="bob@devconnector.io")
