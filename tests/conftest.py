"""Shared test configuration and fixtures.

Uses a transactional rollback strategy per test for full isolation:
- Each test gets its own outer transaction that rolls back after the test.
- Tests run against in-memory SQLite (aiosqlite) unless ``TEST_DATABASE_URL``
  points at another database, e.g. a PostgreSQL ``rentledger_test`` DB.
"""

import os
import uuid
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from rentledger.auth.jwt import create_token_pair
from rentledger.auth.passwords import hash_password
from rentledger.database import Base, get_db
from rentledger.main import app
from rentledger.models.user import User

_test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _make_engine():
    if not _test_db_url.startswith("sqlite"):
        return create_async_engine(_test_db_url, echo=False, pool_pre_ping=True)

    engine = create_async_engine(
        _test_db_url,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite's own transaction handling breaks SAVEPOINT; take it over and
    # turn on foreign keys so ON DELETE CASCADE behaves like PostgreSQL.
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


# ---------------------------------------------------------------------------
# Per-test: fresh schema and transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an engine with all tables and drop them once the test is done."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: one authenticated user per role
# ---------------------------------------------------------------------------


async def _create_user(db_session: AsyncSession, role: str, *, is_active: bool = True) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        email=f"{role.lower()}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        name=f"Test {role.title()}",
        is_active=is_active,
        role=role,
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict[str, str]:
    tokens = create_token_pair(str(user.id), user.role)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "ADMIN")


@pytest_asyncio.fixture
async def staff_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "STAFF")


@pytest_asyncio.fixture
async def viewer_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "VIEWER")


@pytest_asyncio.fixture
async def inactive_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "STAFF", is_active=False)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict[str, str]:
    return _headers_for(admin_user)


@pytest_asyncio.fixture
async def staff_headers(staff_user: User) -> dict[str, str]:
    return _headers_for(staff_user)


@pytest_asyncio.fixture
async def viewer_headers(viewer_user: User) -> dict[str, str]:
    return _headers_for(viewer_user)


# ---------------------------------------------------------------------------
# Convenience fixtures: property, unit, guest helpers
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_property(client: AsyncClient, admin_headers: dict) -> dict:
    """Create and return a test property via the API."""
    response = await client.post(
        "/api/v1/properties",
        json={
            "name": "Villa Serena",
            "address": "Via Roma 123, Milano",
            "notes": "Villa with garden and pool",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, f"Failed to create test property: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def test_unit(client: AsyncClient, admin_headers: dict, test_property: dict) -> dict:
    """Create and return a unit of ``test_property`` via the API."""
    response = await client.post(
        "/api/v1/units",
        json={
            "property_id": test_property["id"],
            "name": "Deluxe Room",
            "unit_type": "ROOM",
            "beds": 2,
            "baths": 1,
            "surface": 25,
            "base_price": "80.00",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, f"Failed to create test unit: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def test_guest(client: AsyncClient, staff_headers: dict) -> dict:
    """Create and return a test guest via the API."""
    unique = uuid.uuid4().hex[:8]
    response = await client.post(
        "/api/v1/guests",
        json={
            "first_name": "Mario",
            "last_name": "Rossi",
            "email": f"guest-{unique}@test.com",
            "phone": "+39 333 1234567",
        },
        headers=staff_headers,
    )
    assert response.status_code == 201, f"Failed to create test guest: {response.text}"
    return response.json()
