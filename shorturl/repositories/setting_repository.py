"""Repository for the key/value ``settings`` table."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shorturl.models.setting import AppSetting
from shorturl.repositories.base import (
    BaseRepository,
    DuplicateEntityError,
    RepositoryError,
    is_unique_violation,
)


class SettingRepository(BaseRepository[AppSetting, AppSetting]):

    def __init__(self):
        super().__init__(AppSetting)

    async def get_value(self, db: AsyncSession, key: str) -> Optional[str]:
        setting = await self.get_by_id(db, key)
        return setting.value if setting is not None else None

    async def set_value(self, db: AsyncSession, key: str, value: str) -> AppSetting:
        """
        Insert or update a setting.

        Raises:
            DuplicateEntityError: If another transaction inserted ``key`` concurrently
            RepositoryError: On other database errors
        """
        setting = await self.get_by_id(db, key)
        if setting is None:
            try:
                return await self.create(db, {"key": key, "value": value})
            except IntegrityError as e:
                if is_unique_violation(e):
                    raise DuplicateEntityError(self.model_type, "key", key) from e
                raise RepositoryError(f"Database error creating setting: {e}") from e

        try:
            setting.value = value
            await db.flush()
            return setting
        except SQLAlchemyError as e:
            raise RepositoryError(f"Database error updating setting {key}: {e}") from e
