"""Services for the web backend."""

from .generation_service import (
    GenerationService,
    GenerationTimeoutError,
    MissingFieldsError,
    ScriptStream,
)

__all__ = [
    "GenerationService",
    "GenerationTimeoutError",
    "MissingFieldsError",
    "ScriptStream",
]
