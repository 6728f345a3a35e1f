"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- In-memory database engine and session fixtures
- Repository fixture
"""

import os

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_JSON"] = "false"


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture
async def engine():
    """
    Provide a fresh in-memory SQLite engine with all tables created.

    Disposed after the test, which drops the database.
    """
    from trial_management.core.database import get_async_engine, init_db

    test_engine = get_async_engine("sqlite+aiosqlite:///:memory:")
    await init_db(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    """
    Session factory bound to the test engine.

    Tests open a new session per unit of work to mirror per-request usage.
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest.fixture
async def async_session(session_factory):
    """Provide a single database session for the test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def repo(async_session):
    """TrialManagementRepository bound to the test session."""
    from trial_management.repositories import TrialManagementRepository

    return TrialManagementRepository(async_session)
