"""URL Repository for the URL shortener application.

This module provides the URLRepository class for database operations related to UrlMapping models.
Following the Repository pattern, it abstracts database interactions for URL shortening operations.
"""

from typing import Any, Dict, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shorturl.models.url import UrlMapping, UrlMappingCreate
from shorturl.repositories.base import (
    BaseRepository,
    RepositoryError,
    DuplicateEntityError,
    is_unique_violation,
)


class URLRepository(BaseRepository[UrlMapping, UrlMappingCreate]):
    """
    Repository for UrlMapping model database operations.

    Mappings are insert-only: there is no update or delete here.
    """

    def __init__(self):
        """Initialize the repository with the UrlMapping model type."""
        super().__init__(UrlMapping)

    async def create_mapping(
        self,
        db: AsyncSession,
        data: Union[UrlMappingCreate, Dict[str, Any]]
    ) -> UrlMapping:
        """
        Create a new URL mapping.

        There is no existence pre-check: the unique index on short_code decides,
        so two concurrent inserts of the same code cannot both succeed.

        Args:
            db: Database session
            data: Mapping data (either as a UrlMappingCreate model or dictionary)

        Returns:
            The created UrlMapping entity

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        if isinstance(data, UrlMappingCreate):
            short_code = data.short_code
        else:
            short_code = data.get("short_code", "unknown")

        try:
            return await self.create(db, data)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError(self.model_type, "short_code", short_code) from e
            raise RepositoryError(f"Database error creating URL mapping: {e}") from e

    async def get_by_short_code(self, db: AsyncSession, short_code: str) -> Optional[UrlMapping]:
        """
        Find a mapping by its short code.

        Args:
            db: Database session
            short_code: The unique short code to look up

        Returns:
            The UrlMapping if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short_code == short_code)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error retrieving URL by short code: {e}") from e
