"""Resilience helpers for the mapping store.

1. Connection retry with exponential backoff at startup
2. Timeouts for individual store operations
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

from shorturl.core.config import settings

logger = logging.getLogger(__name__)

# Type variable for generic function return type
T = TypeVar("T")


def backoff_delay(attempt: int, initial_delay: float, max_delay: float, jitter_factor: float) -> float:
    """Exponential backoff for ``attempt`` (1-based), capped and jittered."""
    delay = min(initial_delay * (2 ** (attempt - 1)), max_delay)
    jitter = delay * jitter_factor
    return max(0.0, delay + random.uniform(-jitter, jitter)) if jitter > 0 else delay


async def connect_with_retry(
    check: Callable[[], Awaitable[bool]],
    name: str = "store",
    max_attempts: int = None,
    initial_delay: float = None,
    max_delay: float = None,
    jitter_factor: float = None,
) -> bool:
    """Run ``check`` until it reports success, backing off between attempts.

    Attempts to establish a backend connection during application startup.
    An attempt fails when ``check`` returns False or raises.

    Returns:
        bool: True if connection was successful, False otherwise
    """
    max_attempts = max_attempts or settings.DB_CONNECT_RETRY_ATTEMPTS
    initial_delay = settings.DB_CONNECT_RETRY_INITIAL_DELAY if initial_delay is None else initial_delay
    max_delay = settings.DB_CONNECT_RETRY_MAX_DELAY if max_delay is None else max_delay
    jitter_factor = settings.DB_CONNECT_RETRY_JITTER if jitter_factor is None else jitter_factor

    logger.info(f"Initializing {name} connection (max attempts: {max_attempts})")

    for attempt in range(1, max_attempts + 1):
        try:
            if await check():
                logger.info(f"{name} connection established on attempt {attempt}")
                return True
            error = "health check returned False"
        except Exception as e:
            error = str(e)

        if attempt < max_attempts:
            backoff_time = backoff_delay(attempt, initial_delay, max_delay, jitter_factor)
            logger.warning(
                f"{name} connection attempt {attempt}/{max_attempts} failed: {error}. "
                f"Retrying in {backoff_time:.2f} seconds..."
            )
            await asyncio.sleep(backoff_time)
        else:
            logger.error(
                f"Failed to connect to {name} after {max_attempts} attempts. "
                f"Last error: {error}"
            )

    return False


async def with_timeout(operation: Awaitable[T], timeout: float = None) -> T:
    """Await ``operation`` but give up after ``timeout`` seconds.

    Raises:
        asyncio.TimeoutError: If the operation did not finish in time
    """
    timeout = settings.STORE_TIMEOUT if timeout is None else timeout
    return await asyncio.wait_for(operation, timeout=timeout)
