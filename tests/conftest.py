"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import logging
from dataclasses import dataclass
from datetime import date

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.noteshare.client.api import BackendClient
from src.noteshare.client.navigation import Navigator
from src.noteshare.client.notifications import Notifier
from src.noteshare.client.session import SessionProvider
from src.noteshare.config import Settings
from src.noteshare.core.models import BaseModel, User
from src.noteshare.core.repositories.note_repository import NoteRepository
from src.noteshare.database import get_db_session
from src.noteshare.main import app
from src.noteshare.security.jwt import create_access_token
from src.noteshare.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def test_settings():
    """Settings pointing at an in-memory SQLite database."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        secret_key="test-secret-key",
        debug=True,
    )


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only honours ON DELETE CASCADE with foreign keys switched on
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    async_session_maker = async_sessionmaker(test_engine, expire_on_commit=False)
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(test_session):
    """App with the database dependency pointed at the test session."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    return TestClient(test_app)


@pytest.fixture
async def async_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


async def _create_user(session, username: str, login_id: str, password: str) -> User:
    user = User(
        username=username,
        login_id=login_id,
        password_hash=hash_password(password),
        date_of_birth=date(2000, 1, 1),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    # plain password kept around for login tests
    user.plain_password = password
    return user


@pytest.fixture
async def test_user(test_session):
    return await _create_user(test_session, "Alice", "alice1", "p@ss")


@pytest.fixture
async def other_user(test_session):
    return await _create_user(test_session, "Bob", "bob1", "hunter2")


def bearer_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def auth_headers(test_user):
    return bearer_headers(test_user)


@pytest.fixture
def other_auth_headers(other_user):
    return bearer_headers(other_user)


@pytest.fixture
async def test_note(test_session, test_user):
    return await NoteRepository(test_session).create_note(
        {
            "title": "Calc Notes",
            "subject": "Math",
            "content": "Limits and derivatives",
            "user_id": test_user.id,
        }
    )


@dataclass
class ClientWorld:
    """Everything a view needs, wired against the in-process app."""

    api: BackendClient
    session: SessionProvider
    notifier: Notifier
    navigator: Navigator

    @property
    def deps(self):
        return (self.session, self.api, self.notifier, self.navigator)


@pytest.fixture
def make_world(async_client):
    """Factory for independent client sessions, one per simulated browser."""

    def _make() -> ClientWorld:
        api = BackendClient(http_client=async_client)
        return ClientWorld(
            api=api, session=SessionProvider(api), notifier=Notifier(), navigator=Navigator()
        )

    return _make


@pytest.fixture
async def alice_world(make_world, test_user):
    world = make_world()
    await world.session.initialize()
    await world.session.sign_in(test_user.login_id, test_user.plain_password)
    return world


@pytest.fixture
async def bob_world(make_world, other_user):
    world = make_world()
    await world.session.initialize()
    await world.session.sign_in(other_user.login_id, other_user.plain_password)
    return world
