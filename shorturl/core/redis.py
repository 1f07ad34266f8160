"""
Redis client management module.

This module provides a Redis client manager with connection pooling
and error handling for async Redis operations.
"""

from typing import Optional

import redis.asyncio as redis
from loguru import logger
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError


class RedisClientManager:
    """
    Async Redis client manager with connection pooling.

    The pool is created lazily on first use. A ready-made client may be
    passed in instead, in which case no pool is managed.
    """

    def __init__(
        self,
        uri: str,
        max_connections: int = 20,
        client: Optional[redis.Redis] = None,
    ):
        self.uri = uri
        self.max_connections = max_connections
        self._connection_pool: Optional[ConnectionPool] = None
        self._client: Optional[redis.Redis] = client

    def _initialize(self) -> None:
        """Initialize the Redis connection pool."""
        self._connection_pool = redis.ConnectionPool.from_url(
            self.uri,
            max_connections=self.max_connections,
            decode_responses=True,
        )
        logger.debug(f"Redis connection pool created for {self.uri}")

    async def get_client(self) -> redis.Redis:
        """
        Get a Redis client instance from the connection pool.

        Returns:
            redis.Redis: Redis client instance
        """
        if self._client is None:
            if self._connection_pool is None:
                self._initialize()
            self._client = redis.Redis(connection_pool=self._connection_pool)
        return self._client

    async def ping(self) -> bool:
        """
        Test the Redis connection with a ping command.

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            client = await self.get_client()
            result = await client.ping()
            return bool(result)
        except (RedisError, OSError) as e:
            logger.error(f"Redis ping failed: {str(e)}")
            return False

    async def close(self) -> None:
        """Close the Redis client and connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

        if self._connection_pool is not None:
            await self._connection_pool.disconnect()
            self._connection_pool = None

        logger.debug("Redis connections closed")
