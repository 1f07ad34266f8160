"""Resolution of short codes back to their original URLs."""

import logging

from shorturl.services.base import StoreBackedService
from shorturl.services.exceptions import URLNotFoundError

logger = logging.getLogger(__name__)


class RedirectService(StoreBackedService):
    """Read-only lookups shared by the redirect and lookup endpoints."""

    async def resolve(self, short_code: str) -> str:
        """
        Return the original URL mapped to ``short_code``.

        Raises:
            URLNotFoundError: If no mapping exists for the code
            StoreUnavailableError: If the store fails or times out
        """
        original_url = await self._call_store(self.store.get(short_code), "resolve short code")
        if original_url is None:
            logger.debug(f"Short code '{short_code}' not found")
            raise URLNotFoundError(f"URL with code '{short_code}' not found")
        return original_url
