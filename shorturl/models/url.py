"""URL mapping data models.

This module defines the UrlMapping model storing the short code to
original URL mapping.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Timezone-aware current UTC time, stored in TIMESTAMP WITH TIME ZONE columns."""
    return datetime.now(timezone.utc)


class UrlMappingBase(SQLModel):
    """Base model for URL mapping data."""

    short_code: str = Field(
        max_length=64,
        description="Unique code used in the short URL path",
        unique=True,   # Creates necessary index
        index=True,
    )
    original_url: str = Field(
        description="The original (long) URL to redirect to"
    )


class UrlMapping(UrlMappingBase, table=True):
    """
    Persisted mapping between a short code and its original URL.

    Rows are written once by the shortening service and never updated or
    deleted afterwards. The unique index on short_code is what makes
    insert-if-absent atomic in the SQL store.
    """

    __tablename__ = "short_urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        description="Timestamp when this mapping was created"
    )


class UrlMappingCreate(UrlMappingBase):
    """Schema for creating a new URL mapping."""
    pass

