"""Fixtures de test / Test fixtures.

Base SQLite en memoire par test, limiteur desactive.
In-memory SQLite database per test, rate limiter disabled.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fleetledger.database import enable_sqlite_foreign_keys, get_db, init_db
from fleetledger.main import app
from fleetledger.rate_limit import limiter

limiter.enabled = False


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    await init_db(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(client, email="owner@example.com", password="secret123", name="Owner") -> dict:
    """Inscrire un utilisateur et retourner ses headers / Register a user and return auth headers."""
    resp = await client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def register_user(client):
    async def _register(email="other@example.com", password="secret123", name="Other"):
        return await register(client, email, password, name)
    return _register


@pytest.fixture
async def auth_headers(client):
    return await register(client)


@pytest.fixture
async def truck(client, auth_headers) -> dict:
    resp = await client.post(
        "/api/trucks/",
        json={"name": "Tata Ace", "truck_number": "DL-01-CD-5678", "model": "Ace Gold"},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
async def driver(client, auth_headers) -> dict:
    resp = await client.post(
        "/api/drivers/",
        json={"name": "Rajesh Kumar", "age": 35, "phone": "+91-9876543210"},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
