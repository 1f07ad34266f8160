"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
"""

from typing import AsyncGenerator, Optional
import asyncio
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SessionManager:
    """Session manager for managing database operations with context manager support.

    Provides a higher-level API for session management with automatic transaction handling.
    When a lock is given, only one session is open at a time.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        lock: Optional[asyncio.Lock] = None,
    ):
        self.session_factory = session_factory
        self.lock = lock

    @asynccontextmanager
    async def exclusive(self) -> AsyncGenerator[None, None]:
        """Hold the session lock, if any, for the duration of the block."""
        if self.lock is None:
            yield
            return
        async with self.lock:
            yield

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Plain session for read-only work, always closed on exit."""
        async with self.exclusive():
            session = self.session_factory()
            try:
                yield session
            finally:
                await session.close()

    @asynccontextmanager
    async def transaction_context(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for a database session with transaction support.

        Automatically commits on successful completion or rolls back on error.

        Yields:
            AsyncSession: SQLAlchemy async session

        Example:
            ```python
            async with manager.transaction_context() as session:
                session.add(UrlMapping(short_code="abc123", original_url="https://example.com"))
                # Commits automatically on context exit if no errors
            ```
        """
        async with self.session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
