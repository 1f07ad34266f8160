"""HTTP middleware for the URL shortener application."""

from shorturl.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
