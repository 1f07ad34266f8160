"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

# First import SQLModel itself to ensure metadata is initialized
from sqlmodel import SQLModel

from shorturl.models.url import UrlMapping, UrlMappingBase, UrlMappingCreate
from shorturl.models.setting import AppSetting

__all__ = [
    "SQLModel",
    "AppSetting",
    "UrlMapping",
    "UrlMappingBase",
    "UrlMappingCreate",
]
