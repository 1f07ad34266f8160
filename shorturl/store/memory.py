"""In-process mapping store backed by dictionaries."""

import asyncio
from datetime import datetime
from typing import Dict, Optional, Tuple

from shorturl.models.url import utcnow
from shorturl.store.base import InsertResult, MappingStore


class InMemoryMappingStore(MappingStore):
    """
    Mapping store that keeps everything in the current process.

    Data is lost on restart. Useful for tests and single-process demos.
    """

    name = "memory"

    def __init__(self):
        # short_code -> (original_url, created_at)
        self._mappings: Dict[str, Tuple[str, datetime]] = {}
        self._settings: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def ping(self) -> bool:
        return True

    async def insert_if_absent(self, short_code: str, original_url: str) -> InsertResult:
        async with self._lock:
            if short_code in self._mappings:
                return InsertResult.ALREADY_EXISTS
            self._mappings[short_code] = (original_url, utcnow())
            return InsertResult.INSERTED

    async def get(self, short_code: str) -> Optional[str]:
        entry = self._mappings.get(short_code)
        return entry[0] if entry is not None else None

    async def get_setting(self, key: str) -> Optional[str]:
        return self._settings.get(key)

    async def put_setting(self, key: str, value: str) -> None:
        async with self._lock:
            self._settings[key] = value

    def __len__(self) -> int:
        return len(self._mappings)
