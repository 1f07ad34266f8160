"""Mapping store backends and the factory selecting one from settings."""

from shorturl.core.config import Settings, StoreBackend, settings as default_settings
from shorturl.store.base import InsertResult, MappingStore, StoreError
from shorturl.store.memory import InMemoryMappingStore


def build_store(settings: Settings = default_settings) -> MappingStore:
    """Create the mapping store configured by ``STORE_BACKEND``."""
    backend = StoreBackend(settings.STORE_BACKEND)

    if backend is StoreBackend.MEMORY:
        return InMemoryMappingStore()

    if backend is StoreBackend.REDIS:
        from shorturl.core.redis import RedisClientManager
        from shorturl.store.redis import RedisMappingStore

        manager = RedisClientManager(
            settings.REDIS_URI,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
        )
        return RedisMappingStore(manager, key_prefix=settings.REDIS_KEY_PREFIX)

    from shorturl.store.sql import SQLMappingStore

    return SQLMappingStore(database_url=settings.DATABASE_URL)


__all__ = [
    "InsertResult",
    "MappingStore",
    "StoreError",
    "InMemoryMappingStore",
    "build_store",
]
