"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
import string
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import AliasChoices, Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Set up basic logger for config module
logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StoreBackend(str, Enum):
    SQL = "sql"
    REDIS = "redis"
    MEMORY = "memory"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Short-code mapping and redirection service"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    BASE_URL: Optional[str] = None  # Used for composing short URLs, defaults to http://localhost:{PORT}
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short code generation
    SHORT_CODE_LENGTH: int = Field(default=6, ge=1)
    SHORT_CODE_MAX_LENGTH: int = Field(default=12, ge=1)
    SHORT_CODE_ATTEMPTS_PER_LENGTH: int = Field(default=3, ge=1)
    SHORT_CODE_ALPHABET: str = string.ascii_letters + string.digits

    # URL validation
    MAX_URL_LENGTH: int = 2048
    ALLOWED_URL_SCHEMES: Union[List[str], str] = ["http", "https", "ftp"]

    # Mapping store
    STORE_BACKEND: StoreBackend = StoreBackend.SQL
    STORE_TIMEOUT: float = 5.0  # Seconds before a store operation is abandoned

    # Database settings
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./shorturl.db",
        validation_alias=AliasChoices("DATABASE_URL", "DB_URL"),
    )
    DB_POOL_SIZE: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Database connection resilience settings
    DB_CONNECT_RETRY_ATTEMPTS: int = 5  # Max number of connection attempts during startup
    DB_CONNECT_RETRY_INITIAL_DELAY: float = 1.0  # Initial delay in seconds
    DB_CONNECT_RETRY_MAX_DELAY: float = 30.0  # Maximum delay in seconds
    DB_CONNECT_RETRY_JITTER: float = 0.1  # Jitter factor (0.0-1.0) to add randomness to backoff

    # Redis settings
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_KEY_PREFIX: str = "shorturl"

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("CORS_ORIGINS", "ALLOWED_URL_SCHEMES", mode="before")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("ALLOWED_URL_SCHEMES")
    def lowercase_schemes(cls, v: List[str]) -> List[str]:
        return [scheme.lower() for scheme in v]

    @field_validator("SHORT_CODE_ALPHABET")
    def validate_alphabet(cls, v: str) -> str:
        if len(set(v)) < 2:
            raise ValueError("SHORT_CODE_ALPHABET needs at least two distinct characters")
        return v

    @model_validator(mode="after")
    def check_code_lengths(self) -> "Settings":
        if self.SHORT_CODE_MAX_LENGTH < self.SHORT_CODE_LENGTH:
            raise ValueError("SHORT_CODE_MAX_LENGTH must be >= SHORT_CODE_LENGTH")
        if not self.BASE_URL:
            self.BASE_URL = f"http://localhost:{self.PORT}"
        return self

    # Computed fields
    @computed_field
    def REDIS_URI(self) -> str:
        """Construct the Redis URI from individual components."""
        password_part = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{password_part}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

# Create a singleton instance of the settings
settings = Settings()
