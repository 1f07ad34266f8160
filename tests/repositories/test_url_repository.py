"""Tests for the URL repository."""

import pytest

from shorturl.repositories.url_repository import URLRepository, DuplicateEntityError
from shorturl.models.url import UrlMapping, UrlMappingCreate
from tests.utils import count_rows, create_test_mapping, random_url


@pytest.mark.repository
class TestURLRepository:
    """Test suite for URL repository."""

    @pytest.fixture
    def url_repository(self):
        """Return URL repository instance."""
        return URLRepository()

    @pytest.mark.asyncio
    async def test_create_mapping(self, test_db, url_repository):
        """Test mapping creation."""
        test_url = random_url()
        short_code = "testcreate"

        mapping = await url_repository.create_mapping(
            db=test_db,
            data=UrlMappingCreate(original_url=test_url, short_code=short_code),
        )

        assert mapping.id is not None
        assert mapping.original_url == test_url
        assert mapping.short_code == short_code
        assert mapping.created_at is not None

        db_mapping = await url_repository.get_by_short_code(test_db, short_code)
        assert db_mapping is not None
        assert db_mapping.original_url == test_url

    @pytest.mark.asyncio
    async def test_create_mapping_from_dict(self, test_db, url_repository):
        mapping = await url_repository.create_mapping(
            test_db, {"original_url": "https://example.com", "short_code": "fromdict"}
        )
        assert mapping.short_code == "fromdict"

    @pytest.mark.asyncio
    async def test_create_duplicate_short_code(self, test_db, url_repository):
        """Test duplicate short code handling."""
        short_code = "duplicate"
        original_url = random_url()
        await create_test_mapping(test_db, original_url=original_url, short_code=short_code)
        await test_db.commit()

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.create_mapping(
                db=test_db,
                data=UrlMappingCreate(original_url=random_url(), short_code=short_code),
            )

        assert excinfo.value.field_name == "short_code"
        assert excinfo.value.value == short_code

        # The existing mapping is untouched
        db_mapping = await url_repository.get_by_short_code(test_db, short_code)
        assert db_mapping.original_url == original_url
        assert await count_rows(test_db, UrlMapping) == 1

    @pytest.mark.asyncio
    async def test_get_by_short_code_nonexistent(self, test_db, url_repository):
        """Test retrieving nonexistent URL."""
        assert await url_repository.get_by_short_code(test_db, "nonexistent") is None

    @pytest.mark.asyncio
    async def test_short_codes_are_case_sensitive(self, test_db, url_repository):
        await create_test_mapping(test_db, short_code="AbC123", original_url="https://upper.example")
        await create_test_mapping(test_db, short_code="abc123", original_url="https://lower.example")

        upper = await url_repository.get_by_short_code(test_db, "AbC123")
        lower = await url_repository.get_by_short_code(test_db, "abc123")

        assert upper.original_url == "https://upper.example"
        assert lower.original_url == "https://lower.example"

