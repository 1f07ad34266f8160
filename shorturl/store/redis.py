"""Redis mapping store.

Mappings live under ``{prefix}:url:{short_code}`` as small JSON documents;
settings share one hash at ``{prefix}:settings``.
"""

import json
from typing import Optional

from loguru import logger
from redis.exceptions import RedisError

from shorturl.core.redis import RedisClientManager
from shorturl.models.url import utcnow
from shorturl.store.base import InsertResult, MappingStore, StoreError


class RedisMappingStore(MappingStore):
    """Mapping store relying on ``SET NX`` for insert-if-absent."""

    name = "redis"

    def __init__(self, manager: RedisClientManager, key_prefix: str = "shorturl"):
        self.manager = manager
        self.key_prefix = key_prefix

    def _url_key(self, short_code: str) -> str:
        return f"{self.key_prefix}:url:{short_code}"

    @property
    def _settings_key(self) -> str:
        return f"{self.key_prefix}:settings"

    async def close(self) -> None:
        await self.manager.close()

    async def ping(self) -> bool:
        return await self.manager.ping()

    async def insert_if_absent(self, short_code: str, original_url: str) -> InsertResult:
        document = json.dumps({
            "original_url": original_url,
            "created_at": utcnow().isoformat(),
        })
        try:
            client = await self.manager.get_client()
            created = await client.set(self._url_key(short_code), document, nx=True)
        except (RedisError, OSError) as e:
            logger.error(f"Redis error storing mapping: {e}")
            raise StoreError(f"Redis error storing mapping: {e}") from e
        return InsertResult.INSERTED if created else InsertResult.ALREADY_EXISTS

    async def get(self, short_code: str) -> Optional[str]:
        try:
            client = await self.manager.get_client()
            raw = await client.get(self._url_key(short_code))
        except (RedisError, OSError) as e:
            logger.error(f"Redis error retrieving mapping: {e}")
            raise StoreError(f"Redis error retrieving mapping: {e}") from e
        if raw is None:
            return None
        try:
            return json.loads(raw)["original_url"]
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Corrupt mapping stored for '{short_code}'") from e

    async def get_setting(self, key: str) -> Optional[str]:
        try:
            client = await self.manager.get_client()
            return await client.hget(self._settings_key, key)
        except (RedisError, OSError) as e:
            raise StoreError(f"Redis error reading setting {key}: {e}") from e

    async def put_setting(self, key: str, value: str) -> None:
        try:
            client = await self.manager.get_client()
            await client.hset(self._settings_key, key, value)
        except (RedisError, OSError) as e:
            raise StoreError(f"Redis error writing setting {key}: {e}") from e
