"""Pydantic models for API requests and responses."""

from .requests import GenerateHooksRequest, GenerateRequest
from .responses import ErrorResponse, HealthCheckItem, HealthResponse

__all__ = [
    # Requests
    "GenerateRequest",
    "GenerateHooksRequest",
    # Responses
    "ErrorResponse",
    "HealthCheckItem",
    "HealthResponse",
]
