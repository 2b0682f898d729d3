"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests. Database tests
run against a fresh in-memory SQLite database per test.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime
from itertools import count

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from themenschaedel.core.logging import setup_logging
from themenschaedel.models import Base, Episode, User

setup_logging()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create test database session.

    Each test gets its own in-memory database with all tables created.

    Yields:
        Test database session
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory for persisted users.

    Users are verified, not admins and not banned unless overridden.
    """

    async def _make(name: str = "alice", **kwargs) -> User:
        kwargs.setdefault("email", f"{name}@example.com")
        kwargs.setdefault("email_verified_at", datetime.now(UTC))
        kwargs.setdefault("is_admin", False)
        kwargs.setdefault("is_banned", False)
        user = User(name=name, **kwargs)
        db_session.add(user)
        await db_session.flush()
        return user

    return _make


@pytest.fixture
def make_episode(db_session: AsyncSession) -> Callable[..., Awaitable[Episode]]:
    """Factory for persisted, unclaimed episodes with their claim loaded."""
    numbers = count(1)

    async def _make(guid: str | None = None, **kwargs) -> Episode:
        number = next(numbers)
        kwargs.setdefault("episode_number", number)
        kwargs.setdefault("title", f"Episode {number}")
        kwargs.setdefault("explicit", False)
        kwargs.setdefault("date_published", datetime(2024, 1, number, tzinfo=UTC))
        episode = Episode(guid=guid or f"episode-{number}", **kwargs)
        db_session.add(episode)
        await db_session.flush()
        await db_session.refresh(episode)
        await db_session.refresh(episode, attribute_names=["claim"])
        return episode

    return _make
