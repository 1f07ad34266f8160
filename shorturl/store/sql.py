"""Relational mapping store built on SQLModel and async SQLAlchemy."""

import asyncio
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import text

from shorturl.db.base import create_tables, get_engine, get_session_factory
from shorturl.db.session import SessionManager
from shorturl.models.url import UrlMappingCreate
from shorturl.repositories.base import DuplicateEntityError, RepositoryError
from shorturl.repositories.setting_repository import SettingRepository
from shorturl.repositories.url_repository import URLRepository
from shorturl.store.base import InsertResult, MappingStore, StoreError

logger = logging.getLogger(__name__)


class SQLMappingStore(MappingStore):
    """
    Mapping store over the ``short_urls`` and ``settings`` tables.

    Each operation runs in its own short transaction, so a mapping becomes
    visible to readers only once its insert has committed.
    """

    name = "database"

    def __init__(
        self,
        engine: AsyncEngine = None,
        session_factory: async_sessionmaker[AsyncSession] = None,
        database_url: str = None,
        owns_engine: bool = None,
    ):
        self._owns_engine = engine is None if owns_engine is None else owns_engine
        self.engine = engine or get_engine(database_url)
        # In-memory SQLite shares one connection, so sessions must not interleave
        lock = asyncio.Lock() if isinstance(self.engine.pool, StaticPool) else None
        self.sessions = SessionManager(
            session_factory or get_session_factory(self.engine),
            lock=lock,
        )
        self.url_repository = URLRepository()
        self.setting_repository = SettingRepository()

    async def initialize(self) -> None:
        try:
            async with self.sessions.exclusive():
                await create_tables(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Failed to create database schema: {e}") from e

    async def close(self) -> None:
        if self._owns_engine:
            await self.engine.dispose()

    async def ping(self) -> bool:
        try:
            async with self.sessions.session() as db:
                result = await db.execute(text("SELECT 1"))
                return result.scalar_one() == 1
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False

    async def insert_if_absent(self, short_code: str, original_url: str) -> InsertResult:
        data = UrlMappingCreate(short_code=short_code, original_url=original_url)
        try:
            async with self.sessions.transaction_context() as db:
                await self.url_repository.create_mapping(db, data)
            return InsertResult.INSERTED
        except DuplicateEntityError:
            logger.debug(f"Short code collision on '{short_code}'")
            return InsertResult.ALREADY_EXISTS
        except RepositoryError as e:
            raise StoreError(str(e)) from e
        except (SQLAlchemyError, OSError) as e:
            # Commit-time failures surface here rather than from the repository
            raise StoreError(f"Database error storing mapping: {e}") from e

    async def get(self, short_code: str) -> Optional[str]:
        try:
            async with self.sessions.session() as db:
                mapping = await self.url_repository.get_by_short_code(db, short_code)
        except RepositoryError as e:
            raise StoreError(str(e)) from e
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Database error retrieving mapping: {e}") from e
        return mapping.original_url if mapping is not None else None

    async def get_setting(self, key: str) -> Optional[str]:
        try:
            async with self.sessions.session() as db:
                return await self.setting_repository.get_value(db, key)
        except RepositoryError as e:
            raise StoreError(str(e)) from e
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"Database error reading setting {key}: {e}") from e

    async def put_setting(self, key: str, value: str) -> None:
        # A concurrent first insert of the same key makes the second attempt an update
        for attempt in range(2):
            try:
                async with self.sessions.transaction_context() as db:
                    await self.setting_repository.set_value(db, key, value)
                return
            except DuplicateEntityError:
                if attempt:
                    raise StoreError(f"Could not store setting {key}")
            except RepositoryError as e:
                raise StoreError(str(e)) from e
            except (SQLAlchemyError, OSError) as e:
                raise StoreError(f"Database error writing setting {key}: {e}") from e
