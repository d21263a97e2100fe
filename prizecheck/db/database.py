"""
Database access for saved decklists, recorded games and player preferences.

One async engine per process, pointed at settings.database_url. Request
handlers get a session through the get_session dependency, so deleting a
deck and its game sessions commits or rolls back as one. The lifespan creates the tables
on startup and disposes of the connection pool on shutdown; /ready checks
the same tables.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from prizecheck.config import settings
from prizecheck.models.db import Base

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Commits when the request handler returns, rolls back on database errors.
    A handler that raises before returning leaves nothing written.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            logger.warning("Rolling back after database error: %s", e)
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the decklist, game session and preference tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Release pooled connections. Called from the application lifespan."""
    await engine.dispose()


async def drop_db() -> None:
    """
    Drop all tables.

    WARNING: Destroys all recorded games. Use only for testing.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
