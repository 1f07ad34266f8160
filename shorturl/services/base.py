"""Shared plumbing for services that talk to the mapping store."""

import asyncio
import logging
from typing import Awaitable, TypeVar

from shorturl.core.config import settings
from shorturl.db.resilience import with_timeout
from shorturl.services.exceptions import StoreUnavailableError
from shorturl.store.base import MappingStore, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreBackedService:
    """Base class bounding every store call by a timeout."""

    def __init__(self, store: MappingStore, store_timeout: float = None):
        self.store = store
        self.store_timeout = settings.STORE_TIMEOUT if store_timeout is None else store_timeout

    async def _call_store(self, operation: Awaitable[T], action: str) -> T:
        """
        Await a store operation.

        Raises:
            StoreUnavailableError: If the store fails or times out
        """
        try:
            return await with_timeout(operation, self.store_timeout)
        except asyncio.TimeoutError:
            logger.error(f"Store timed out after {self.store_timeout}s while trying to {action}")
            raise StoreUnavailableError(f"Mapping store timed out while trying to {action}")
        except StoreError as e:
            logger.error(f"Store failure while trying to {action}: {e}")
            raise StoreUnavailableError(f"Mapping store unavailable while trying to {action}") from e
