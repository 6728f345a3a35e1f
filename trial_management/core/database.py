"""
Database configuration and session management.

Provides SQLAlchemy async engine setup, session factory, and helpers
for creating the schema and handing out sessions to repositories.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from trial_management.core.config import settings
from trial_management.core.logging_config import get_logger
from trial_management.models.base import Base

logger = get_logger(__name__)


def get_async_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    For SQLite:
    - Uses StaticPool (single connection shared across the process)
    - Enables check_same_thread=False for async compatibility
    - Turns on foreign key enforcement for every connection

    Args:
        database_url: Connection URL, defaults to settings.database_url

    Returns:
        Configured AsyncEngine instance
    """
    url = database_url or settings.database_url
    is_sqlite = url.startswith("sqlite")

    # SQLite-specific connection arguments (noop for other drivers)
    connect_args: dict = {"check_same_thread": False} if is_sqlite else {}

    engine_kwargs = {
        "echo": settings.sql_echo,
        "connect_args": connect_args,
    }

    if is_sqlite:
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# Global async engine instance
# Created once at import and reused
engine = get_async_engine()


# Async session factory
# One session per unit of work (request, job, script)
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Returned entities stay readable after commit
    autoflush=False,
)


async def init_db(target_engine: Optional[AsyncEngine] = None) -> None:
    """
    Create all tables on the given engine (the global one by default).

    Example:
        await init_db()
    """
    # Import models to ensure metadata is populated before create_all()
    from trial_management import models  # noqa: F401

    target = target_engine or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready", extra={"url": str(target.url)})


async def close_db() -> None:
    """
    Close the database connection.

    Should be called at application shutdown to cleanly close
    all database connections.
    """
    await engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session generator for repository consumers.

    Yields:
        AsyncSession instance for database operations

    Example:
        async for session in get_session():
            repo = TrialManagementRepository(session)
            result = await repo.get_organization(org_id)

    Note:
        - Repository add operations commit on their own
        - Session is automatically closed after use
    """
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


class DatabaseHealthCheck:
    """
    Database health check utilities.

    Provides methods to verify database connectivity and readiness.
    """

    @staticmethod
    async def check_connection(
        session_factory: Optional[async_sessionmaker] = None
    ) -> bool:
        """
        Check if database connection is healthy.

        Args:
            session_factory: Session factory to probe (global one by default)

        Returns:
            True if database is reachable, False otherwise
        """
        factory = session_factory or async_session_maker
        try:
            async with factory() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False
