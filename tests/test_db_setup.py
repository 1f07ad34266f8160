"""Basic tests to verify test DB setup."""

import pytest
from sqlalchemy import select, text
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from shorturl.db.base import create_tables, get_engine, get_engine_config
from shorturl.models.setting import AppSetting
from shorturl.models.url import UrlMapping, utcnow


@pytest.mark.asyncio
async def test_create_tables(test_db):
    """Verify tables are created correctly in test database."""
    result = await test_db.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))
    tables = [row[0] for row in result.fetchall()]
    assert "short_urls" in tables
    assert "settings" in tables

    mapping = UrlMapping(original_url="https://example.com", short_code="test123")
    test_db.add(mapping)
    await test_db.commit()

    result = await test_db.execute(select(UrlMapping).where(UrlMapping.short_code == "test123"))
    retrieved = result.scalars().first()

    assert retrieved is not None
    assert retrieved.original_url == "https://example.com"


@pytest.mark.asyncio
async def test_short_code_has_unique_index(test_db):
    result = await test_db.execute(text("PRAGMA index_list('short_urls')"))
    # Columns: seq, name, unique, origin, partial
    unique_indexes = [row[1] for row in result.fetchall() if row[2] == 1]
    assert unique_indexes

    indexed_columns = []
    for name in unique_indexes:
        info = await test_db.execute(text(f"PRAGMA index_info('{name}')"))
        indexed_columns.extend(row[2] for row in info.fetchall())
    assert "short_code" in indexed_columns


@pytest.mark.asyncio
async def test_create_tables_is_idempotent(tmp_path):
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}")
    try:
        await create_tables(engine)
        await create_tables(engine)
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))
            tables = {row[0] for row in result.fetchall()}
        assert {"short_urls", "settings"} <= tables
    finally:
        await engine.dispose()


def test_engine_config_for_memory_sqlite_uses_static_pool():
    config = get_engine_config("sqlite+aiosqlite:///:memory:")
    assert config["poolclass"].__name__ == "StaticPool"


def test_engine_config_for_postgres_uses_pool_settings():
    config = get_engine_config("postgresql+asyncpg://user:pw@localhost/db")
    assert config["pool_pre_ping"] is True
    assert "pool_size" in config


@pytest.mark.parametrize("model", [UrlMapping, AppSetting])
def test_created_at_column_matches_timestamp_values(model):
    column = model.__table__.c.created_at

    assert column.type.timezone is True
    assert utcnow().tzinfo is not None

    ddl = str(CreateTable(model.__table__).compile(dialect=postgresql.dialect()))
    assert "created_at TIMESTAMP WITH TIME ZONE" in ddl
