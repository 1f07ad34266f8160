"""Test utilities for URL shortener tests."""

import random
import string
from typing import List, Optional

from sqlalchemy import func, select

from shorturl.models.url import UrlMapping
from shorturl.services.generator import CodeGenerator
from shorturl.store.base import InsertResult, MappingStore, StoreError


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_mapping(
    db,
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
) -> UrlMapping:
    """Create and persist a test UrlMapping in the database."""
    mapping = UrlMapping(
        original_url=original_url or random_url(),
        short_code=short_code or random_string(6),
    )
    db.add(mapping)
    await db.flush()
    await db.refresh(mapping)
    return mapping


async def count_rows(db, model) -> int:
    """Number of rows in the table behind ``model``."""
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class ScriptedGenerator(CodeGenerator):
    """Generator returning predetermined codes and recording requested lengths.

    Once the script runs out the last code is repeated.
    """

    def __init__(self, codes: List[str], default_length: int = 6):
        super().__init__(default_length=default_length)
        self.codes = list(codes)
        self.lengths: List[int] = []

    def generate(self, length: int = None) -> str:
        self.lengths.append(length or self.default_length)
        if len(self.codes) > 1:
            return self.codes.pop(0)
        return self.codes[0]


class FailingStore(MappingStore):
    """Store whose every operation fails."""

    name = "failing"

    async def ping(self) -> bool:
        return False

    async def insert_if_absent(self, short_code: str, original_url: str) -> InsertResult:
        raise StoreError("backend down")

    async def get(self, short_code: str):
        raise StoreError("backend down")

    async def get_setting(self, key: str):
        raise StoreError("backend down")

    async def put_setting(self, key: str, value: str) -> None:
        raise StoreError("backend down")
