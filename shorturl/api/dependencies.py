"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the mapping store and service instances.
"""

from fastapi import Depends, Request

from shorturl.core.config import settings
from shorturl.services.redirect import RedirectService
from shorturl.services.shortener import ShortenerService
from shorturl.store.base import MappingStore


def get_store(request: Request) -> MappingStore:
    """Get the mapping store created at application startup."""
    return request.app.state.store


def get_base_url() -> str:
    """Get the base URL for shortened links."""
    return settings.BASE_URL


def get_shortener_service(
    store: MappingStore = Depends(get_store),
    base_url: str = Depends(get_base_url),
) -> ShortenerService:
    """Get an instance of the URL shortening service."""
    return ShortenerService(store=store, base_url=base_url)


def get_redirect_service(
    store: MappingStore = Depends(get_store),
) -> RedirectService:
    """Get an instance of the redirection service."""
    return RedirectService(store=store)
