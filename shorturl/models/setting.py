"""Runtime settings persisted alongside the URL mappings."""
from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from shorturl.models.url import utcnow


class AppSetting(SQLModel, table=True):
    """Key/value row for service state that must survive restarts."""

    __tablename__ = "settings"

    key: str = Field(primary_key=True, max_length=64)
    value: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
