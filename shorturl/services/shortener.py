"""URL shortening service for the URL shortener application.

This module contains the ShortenerService class which validates URLs,
obtains fresh short codes and persists the resulting mappings.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import urlsplit

from shorturl.core.config import settings
from shorturl.services.base import StoreBackedService
from shorturl.services.exceptions import CollisionExhaustedError, InvalidURLError
from shorturl.services.generator import CodeGenerator
from shorturl.store.base import InsertResult, MappingStore

logger = logging.getLogger(__name__)

CODE_LENGTH_SETTING = "short_code_length"


@dataclass(frozen=True)
class ShortenResult:
    short_code: str
    short_url: str


class ShortenerService(StoreBackedService):
    """
    Service for URL shortening business logic.

    Codes are drawn at the current code length, persisted under the
    ``short_code_length`` setting. When every attempt at a length collides
    the length grows by one, up to ``max_code_length``; past that the
    service gives up with CollisionExhaustedError.
    """

    def __init__(
        self,
        store: MappingStore,
        base_url: str = None,
        generator: Optional[CodeGenerator] = None,
        attempts_per_length: int = None,
        max_code_length: int = None,
        allowed_schemes: Iterable[str] = None,
        max_url_length: int = None,
        store_timeout: float = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            store: Mapping store used for persistence
            base_url: Address short URLs are composed against
            generator: Code generator, built from settings when omitted
            attempts_per_length: Insert attempts before the code length grows
            max_code_length: Largest code length tried before giving up
            allowed_schemes: URL schemes accepted for shortening
            max_url_length: Longest original URL accepted
            store_timeout: Seconds allowed for each store call
        """
        super().__init__(store, store_timeout)
        self.base_url = (base_url or settings.BASE_URL).rstrip("/")
        self.generator = generator or CodeGenerator(
            alphabet=settings.SHORT_CODE_ALPHABET,
            default_length=settings.SHORT_CODE_LENGTH,
        )
        self.attempts_per_length = attempts_per_length or settings.SHORT_CODE_ATTEMPTS_PER_LENGTH
        self.max_code_length = max(
            max_code_length or settings.SHORT_CODE_MAX_LENGTH,
            self.generator.default_length,
        )
        self.allowed_schemes = {
            scheme.lower() for scheme in (allowed_schemes or settings.ALLOWED_URL_SCHEMES)
        }
        self.max_url_length = max_url_length or settings.MAX_URL_LENGTH

    async def shorten(self, original_url: str) -> ShortenResult:
        """
        Create a new mapping for ``original_url``.

        Args:
            original_url: The absolute URL to shorten

        Returns:
            ShortenResult: The generated code and its full short URL

        Raises:
            InvalidURLError: If the URL is malformed; nothing is stored
            CollisionExhaustedError: If no free code was found within the bound
            StoreUnavailableError: If the store fails or times out
        """
        url = self.validate_url(original_url)
        length = await self._current_code_length()

        while True:
            for _ in range(self.attempts_per_length):
                short_code = self.generator.generate(length)
                result = await self._call_store(
                    self.store.insert_if_absent(short_code, url),
                    "store mapping",
                )
                if result is InsertResult.INSERTED:
                    logger.info(f"Created short code '{short_code}'")
                    return ShortenResult(
                        short_code=short_code,
                        short_url=self.compose_short_url(short_code),
                    )
                logger.debug(f"Short code '{short_code}' already taken, retrying")

            if length >= self.max_code_length:
                logger.error(
                    f"Exhausted {self.attempts_per_length} attempts at maximum code length "
                    f"{self.max_code_length}; code space is too small for the load"
                )
                raise CollisionExhaustedError(
                    "Failed to generate a unique short code. Try again later."
                )

            length = await self._grow_code_length(length + 1)

    async def _grow_code_length(self, length: int) -> int:
        """
        Persist ``length`` unless another request already stored a longer one.

        Returns:
            int: The code length to continue with
        """
        current = await self._current_code_length()
        if current >= length:
            return current

        await self._call_store(
            self.store.put_setting(CODE_LENGTH_SETTING, str(length)),
            "save short code length",
        )
        logger.warning(f"short_code_length has been changed to {length}")
        return length

    def compose_short_url(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    def validate_url(self, original_url) -> str:
        """
        Check that ``original_url`` is an absolute URL with scheme and host.

        Returns:
            str: The URL with surrounding whitespace removed

        Raises:
            InvalidURLError: If the URL is not acceptable
        """
        if not isinstance(original_url, str):
            raise InvalidURLError("URL must be a string")

        url = original_url.strip()
        if not url:
            raise InvalidURLError("URL must not be empty")
        if len(url) > self.max_url_length:
            raise InvalidURLError(f"URL exceeds {self.max_url_length} characters")
        if any(char.isspace() for char in url):
            raise InvalidURLError(f"Invalid URL format: {url}")

        try:
            parts = urlsplit(url)
            host = parts.hostname
            parts.port  # Raises ValueError for a malformed port
        except ValueError:
            raise InvalidURLError(f"Invalid URL format: {url}")

        if parts.scheme.lower() not in self.allowed_schemes:
            raise InvalidURLError(f"Invalid URL format: {url}")
        if not host:
            raise InvalidURLError(f"Invalid URL format: {url}")

        return url

    async def _current_code_length(self) -> int:
        stored = await self._call_store(
            self.store.get_setting(CODE_LENGTH_SETTING),
            "read short code length",
        )
        if stored is None:
            return self.generator.default_length
        try:
            length = int(stored)
        except ValueError:
            logger.warning(f"Error parsing short_code_length value: {stored!r}")
            return self.generator.default_length
        return min(max(length, self.generator.default_length), self.max_code_length)
