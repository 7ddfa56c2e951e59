"""Pydantic response models for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by the generate endpoints."""

    error: str
    message: str | None = None
    details: str | None = None


class HealthCheckItem(BaseModel):
    """One health check."""

    status: Literal["ok", "error"]
    message: str


class HealthResponse(BaseModel):
    """Overall service health."""

    status: Literal["healthy", "unhealthy"]
    timestamp: str = Field(description="ISO 8601 time of the check")
    checks: dict[str, HealthCheckItem]
