"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskstation.config import settings
from taskstation.models import Base


def _engine_options(url: str) -> dict[str, Any]:
    """Pool options for the configured backend.

    SQLite uses a single-connection pool that rejects sizing arguments.
    """
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 5,
        "max_overflow": 10,
    }


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,  # Log SQL in debug mode
    **_engine_options(settings.async_database_url),
)

# Session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Don't expire objects after commit (needed for async)
    autocommit=False,
    autoflush=False,
)


async def init_db() -> None:
    """Create tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database sessions.

    The session is committed when the request handler returns normally and
    rolled back when it raises, so a failed request never persists anything.

    Yields:
        AsyncSession: Database session that will be automatically closed.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
