"""Database module for the URL shortener application."""
from shorturl.db.base import (
    get_engine,
    get_session_factory,
    create_tables,
)
from shorturl.db.session import SessionManager
from shorturl.db.resilience import connect_with_retry, with_timeout

__all__ = [
    "get_engine",
    "get_session_factory",
    "create_tables",
    "SessionManager",
    "connect_with_retry",
    "with_timeout",
]
