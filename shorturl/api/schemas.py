"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request schema for creating a short URL.

    The URL is accepted as a plain string so malformed URLs reach the
    service and are answered with 400 rather than a schema error.
    """
    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(
        validation_alias=AliasChoices("url", "original_url"),
        description="Absolute URL to shorten",
        examples=["https://example.com/very/long/path"],
    )


class ShortenResponse(BaseModel):
    """Response schema for a created short URL."""
    short_url: str
    short_code: str


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str


class ComponentHealth(BaseModel):
    status: str
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str
    timestamp: float
    components: Dict[str, ComponentHealth]
