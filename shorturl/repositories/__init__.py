"""
Repository package for the URL shortener application.

This package contains repository classes that implement the Repository pattern
for database access, providing a clean abstraction over the SQL backend.
"""

from shorturl.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError
from shorturl.repositories.url_repository import URLRepository
from shorturl.repositories.setting_repository import SettingRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",
    "URLRepository",
    "SettingRepository",
]
