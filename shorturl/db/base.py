"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Session factory setup
- Schema creation
"""

from typing import Dict, Optional
import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shorturl.core.config import settings

logger = logging.getLogger(__name__)


def get_engine_config(database_url: str) -> Dict:
    """Get the engine configuration appropriate for the database dialect.

    Args:
        database_url: SQLAlchemy async database URL

    Returns:
        Dict: Engine configuration parameters.
    """
    if database_url.startswith("sqlite"):
        config: Dict = {
            "echo": settings.DB_ECHO,
            "connect_args": {"check_same_thread": False},
        }
        if ":memory:" in database_url or database_url.rstrip("/").endswith("sqlite+aiosqlite:"):
            # A single shared connection, otherwise every session sees its own empty database
            config["poolclass"] = StaticPool
        return config

    return {
        "echo": settings.DB_ECHO,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = database_url or settings.DATABASE_URL
    logger.info(f"Creating database engine with URL: {engine_url}")
    return create_async_engine(engine_url, **get_engine_config(engine_url))


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the async session factory bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables known to SQLModel metadata if they do not exist."""
    # Registers the table models on SQLModel.metadata
    import shorturl.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema is up to date")

