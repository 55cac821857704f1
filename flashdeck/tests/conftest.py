"""Pytest configuration and fixtures for flashdeck tests."""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from uuid import UUID

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from flashdeck.core.config import settings
from flashdeck.core.database import Base
from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.users.models import User

# Integration tests need a disposable PostgreSQL database
DB_TESTS_ENABLED = os.getenv("FLASHDECK_TEST_DB") == "1"
TEST_DATABASE_URL = os.getenv("FLASHDECK_TEST_DB_URL", settings.db.async_url)


# ==================== Database Fixtures ====================


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test engine and a fresh schema for a single test."""
    if not DB_TESTS_ENABLED:
        pytest.skip("set FLASHDECK_TEST_DB=1 to run database tests")

    engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Session rolled back after the test."""
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# ==================== Helper Functions ====================


def create_test_uuid(index: int = 0) -> UUID:
    """Create a deterministic UUID for testing."""
    return UUID(f"00000000-0000-0000-0000-{index:012d}")


def principal_for(user: User) -> Principal:
    return Principal.from_user(user)


def assert_datetime_recent(dt: datetime, seconds: int = 10) -> None:
    """Assert that a datetime is recent (within specified seconds)."""
    now = datetime.now(UTC)
    delta = abs((now - dt).total_seconds())
    assert delta < seconds, f"Datetime {dt} is not recent (delta: {delta}s)"


# ==================== Pytest Configuration ====================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests that need PostgreSQL (FLASHDECK_TEST_DB=1)",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the database manager singleton between tests."""
    yield
    from flashdeck.core.database import DatabaseManager

    DatabaseManager._instance = None
    DatabaseManager._engine = None
    DatabaseManager._session_factory = None
