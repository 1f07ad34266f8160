"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shorturl.api.routes import shortener, redirect, health
from shorturl.core.config import settings

# Create root router
api_router = APIRouter()

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

# Shortening and lookup live at the root next to the short codes
api_router.include_router(
    shortener.router
)

# Include redirect routes last: /{short_code} would otherwise shadow /lookup
api_router.include_router(
    redirect.router
)

__all__ = ["api_router"]
