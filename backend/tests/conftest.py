"""
Travel API Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (service unit tests)
    ├── temp_storage: Temporary directory for file operations
    ├── sample_image_bytes: Fake image content for upload tests
    ├── db_engine: In-memory SQLite engine with the full schema
    ├── db_session: Session on db_engine for seeding rows directly
    └── test_client: HTTPX AsyncClient wired to db_engine

SQLite notes:
    - PRAGMA foreign_keys=ON so ON DELETE CASCADE and FK failures behave
      like PostgreSQL
    - pysqlite's own transaction handling is switched off and BEGIN is
      emitted by SQLAlchemy, otherwise SAVEPOINT (used by the like toggle)
      does not work
"""

import os
import tempfile

# Override settings for testing BEFORE any travel_api imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_ROOT"] = tempfile.mkdtemp(prefix="travel_api_test_")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"  # fastest legal work factor

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from travel_api.database import Base, get_db_session
from travel_api.exceptions import DatabaseError
from travel_api.models import Like, Place, User
from travel_api.security import hash_password

BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

# Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9)
JPEG_BYTES = (
    b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
    b'\xff\xd9'
)


# ══════════════════════════════════════════════════════════════════════════
# Unit Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_is_admin(mock_db_session):
            mock_db_session.execute.return_value = result_with("admin")
            assert await user_service.is_admin(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_storage(tmp_path):
    """A fresh upload directory for each test (pytest cleans it up)."""
    storage_dir = tmp_path / "uploads"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_image_bytes():
    return JPEG_BYTES


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine holding the full schema, one per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for seeding and inspecting rows outside the HTTP layer."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.

    get_db_session is overridden to hand out sessions bound to the
    in-memory engine, with the same rollback/commit behaviour.

    Usage:
        async def test_places(test_client):
            response = await test_client.get("/places")
            assert response.status_code == 200
    """
    from travel_api.main import app

    async def _override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError.from_exception("Failed to save changes", e)

    app.dependency_overrides[get_db_session] = _override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Seeding Helpers
# ══════════════════════════════════════════════════════════════════════════

async def create_user(
    session: AsyncSession,
    *,
    username: str = "traveller",
    email: Optional[str] = None,
    password: str = "secret",
    role: str = "user",
) -> User:
    user = User(
        username=username,
        email=email or f"{username}@example.com",
        password=hash_password(password),
        role=role,
    )
    session.add(user)
    await session.commit()
    return user


async def create_place(
    session: AsyncSession,
    owner: User,
    *,
    title: str = "Lake Bled",
    rating: float = 0.0,
    minutes_after: int = 0,
) -> Place:
    """Insert a place; created_at is BASE_TIME + minutes_after for stable ordering."""
    place = Place(
        title=title,
        description=f"About {title}",
        location="Slovenia",
        image="uploads/2024/01/15/seed.jpg",
        user_id=owner.id,
        rating=rating,
        created_at=BASE_TIME + timedelta(minutes=minutes_after),
    )
    session.add(place)
    await session.commit()
    return place


async def add_likes(session: AsyncSession, place: Place, count: int) -> None:
    """Give `place` `count` likes from freshly created users."""
    for i in range(count):
        fan = await create_user(session, username=f"fan{place.id}_{i}")
        session.add(Like(place_id=place.id, user_id=fan.id))
    await session.commit()


@pytest_asyncio.fixture
async def admin_user(db_session) -> User:
    return await create_user(db_session, username="admin", role="admin")


@pytest_asyncio.fixture
async def regular_user(db_session) -> User:
    return await create_user(db_session, username="ana")
