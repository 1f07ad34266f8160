"""
Mapping store contract.

Every backend provides an atomic insert-if-absent and a point lookup keyed
by short code, plus a tiny key/value area for service settings. Business
logic depends only on this class, never on a concrete backend.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class InsertResult(str, Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class StoreError(Exception):
    """The backing storage failed or is unreachable."""
    pass


class MappingStore(ABC):
    """Abstract base class for mapping store backends."""

    name: str = "store"

    async def initialize(self) -> None:
        """Prepare the backend (create schema, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def ping(self) -> bool:
        """Return True if the backend is reachable."""
        raise NotImplementedError

    @abstractmethod
    async def insert_if_absent(self, short_code: str, original_url: str) -> InsertResult:
        """
        Store ``short_code -> original_url`` unless the code is already taken.

        Check and write happen as one atomic step: of two concurrent calls for
        the same code exactly one returns INSERTED. An existing mapping is
        never overwritten.

        Raises:
            StoreError: If the backend fails
        """
        raise NotImplementedError

    @abstractmethod
    async def get(self, short_code: str) -> Optional[str]:
        """
        Return the original URL for ``short_code`` or None when absent.

        Raises:
            StoreError: If the backend fails
        """
        raise NotImplementedError

    @abstractmethod
    async def get_setting(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def put_setting(self, key: str, value: str) -> None:
        raise NotImplementedError
