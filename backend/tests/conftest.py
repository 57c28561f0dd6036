"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh in-memory SQLite database (override with
TEST_DATABASE_URL) and Redis is disabled, so no services are needed.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timezone, timedelta  # noqa: E402
from typing import AsyncGenerator, Callable  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from eventhub.main import app  # noqa: E402
from eventhub.db.base import Base  # noqa: E402
from eventhub.db.session import get_db  # noqa: E402
from eventhub.core.security import create_access_token, hash_password  # noqa: E402
from eventhub.models.user import User  # noqa: E402
from eventhub.models.event import Event, event_attendees  # noqa: E402

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection, otherwise every checkout sees an empty :memory: db
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add_user(db_session: AsyncSession, **fields) -> User:
    user = User(**fields)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A regular account: test@example.com / testpassword123."""
    return await _add_user(
        db_session,
        name="Test User",
        email="test@example.com",
        hashed_password=hash_password("testpassword123"),
        is_guest=False,
    )


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await _add_user(
        db_session,
        name="Other User",
        email="other@example.com",
        hashed_password=hash_password("otherpassword123"),
        is_guest=False,
    )


@pytest_asyncio.fixture
async def guest_user(db_session: AsyncSession) -> User:
    return await _add_user(
        db_session,
        name="Guest User",
        email="guest@example.com",
        hashed_password=hash_password("throwaway"),
        is_guest=True,
    )


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    """Build Bearer headers for any user."""

    def _headers(user: User) -> dict:
        token = create_access_token(data={"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def auth_headers(test_user: User, headers_for) -> dict:
    """Authorization headers for test_user (the organizer of test_event)."""
    return headers_for(test_user)


@pytest_asyncio.fixture
async def other_headers(other_user: User, headers_for) -> dict:
    return headers_for(other_user)


async def _add_event(db_session: AsyncSession, **fields) -> Event:
    event = Event(**fields)
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession, test_user: User) -> Event:
    """An upcoming event organized by test_user with room for 2 attendees."""
    return await _add_event(
        db_session,
        title="Test Meetup",
        description="A test event",
        category="Meetup",
        date=datetime.now(timezone.utc) + timedelta(days=30),
        location="Test Venue",
        max_attendees=2,
        organizer_id=test_user.id,
    )


@pytest_asyncio.fixture
async def full_event(db_session: AsyncSession, test_user: User, guest_user: User) -> Event:
    """An event whose single spot is taken by guest_user."""
    event = await _add_event(
        db_session,
        title="Sold Out Workshop",
        description="No spots left",
        category="Workshop",
        date=datetime.now(timezone.utc) + timedelta(days=10),
        location="Small Room",
        max_attendees=1,
        organizer_id=test_user.id,
    )
    await db_session.execute(
        event_attendees.insert().values(event_id=event.id, user_id=guest_user.id)
    )
    await db_session.commit()
    return event
