"""Service layer for the URL shortener application.

This package contains service classes implementing the business logic of the application.
Services orchestrate the code generator and the mapping store.
"""

from shorturl.services.generator import CodeGenerator
from shorturl.services.shortener import ShortenerService, ShortenResult
from shorturl.services.redirect import RedirectService

__all__ = ["CodeGenerator", "ShortenerService", "ShortenResult", "RedirectService"]
