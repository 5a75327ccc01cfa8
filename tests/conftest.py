"""Shared fixtures.

Tests run against a throwaway SQLite file (aiosqlite) instead of Postgres.
Each transaction opens with BEGIN IMMEDIATE so concurrent writers queue on
the database lock the way row locks serialize them on Postgres.
"""

import os

# Settings are cached on first use; configure before importing the app.
os.environ.setdefault("JWT_SECRET", "test-secret-0123456789abcdef0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_DEFAULT_ADMIN", "false")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

from rating_portal.main import app
from rating_portal.models import Role, Store, User
from rating_portal.services.accounts import create_store_with_owner, create_user
from rating_portal.stores import postgres
from rating_portal.stores.postgres import close_db, create_tables, get_session, init_db

DEFAULT_PASSWORD = "Password1!"


def _serialize_sqlite_writers(engine) -> None:
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


@pytest.fixture
async def db(tmp_path):
    """Initialize a fresh database with all tables."""
    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    _serialize_sqlite_writers(postgres.get_engine())
    await create_tables()
    yield
    await close_db()


@pytest.fixture
async def session(db):
    """Database session for calling services directly."""
    async with get_session() as s:
        yield s


@pytest.fixture
async def client(db):
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def make_user(db):
    """Factory creating an identity through the account service."""

    async def _make_user(
        email: str,
        role: Role = Role.USER,
        name: str = "Regular Test User Account",
        password: str = DEFAULT_PASSWORD,
        address: str = "1 Test Street",
    ) -> User:
        async with get_session() as s:
            return await create_user(s, name=name, email=email, password=password, address=address, role=role)

    return _make_user


@pytest.fixture
def make_store(db):
    """Factory creating a store together with its owner login."""

    async def _make_store(
        email: str,
        name: str = "Neighbourhood Test Store",
        password: str = DEFAULT_PASSWORD,
        address: str = "2 Market Square",
    ) -> Store:
        async with get_session() as s:
            return await create_store_with_owner(s, name=name, email=email, address=address, password=password)

    return _make_store


@pytest.fixture
def auth_headers(client):
    """Log in through the API and return an Authorization header."""

    async def _auth_headers(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _auth_headers
