"""Script generation router."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from ....generation import ServiceUnavailableError
from ....providers import ConfigurationError, GenerationError
from ..dependencies import GenerationServiceDep
from ..models.requests import GenerateHooksRequest, GenerateRequest
from ..models.responses import ErrorResponse
from ..services.generation_service import MissingFieldsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate", tags=["generate"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _error(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("", response_class=StreamingResponse, responses=ERROR_RESPONSES)
async def generate_script(request: GenerateRequest, service: GenerationServiceDep):
    """Stream a generated script as JSON text."""
    try:
        result = await service.generate(request.to_generation_request())
    except ServiceUnavailableError as e:
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            ErrorResponse(error="AI service unavailable", details=e.details),
        )
    except MissingFieldsError as e:
        return _error(status.HTTP_400_BAD_REQUEST, ErrorResponse(error=str(e)))
    except (ConfigurationError, GenerationError) as e:
        logger.error("Generation setup failed: %s", e)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Failed to generate script", message=str(e)),
        )

    background = BackgroundTask(result.on_complete) if result.on_complete else None
    return StreamingResponse(
        result.chunks,
        media_type="text/plain; charset=utf-8",
        headers=result.headers,
        background=background,
    )


@router.post("/hooks", responses=ERROR_RESPONSES)
async def generate_hooks(request: GenerateHooksRequest, service: GenerationServiceDep):
    """Generate five hook variations for a topic."""
    try:
        hooks = await service.generate_hooks(request.topic, request.vibe)
    except ServiceUnavailableError as e:
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            ErrorResponse(error="AI service unavailable", details=e.details),
        )
    except MissingFieldsError as e:
        return _error(status.HTTP_400_BAD_REQUEST, ErrorResponse(error=str(e)))
    except (ConfigurationError, GenerationError) as e:
        logger.error("Hook generation failed: %s", e)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Failed to generate hooks", message=str(e)),
        )

    return hooks.to_wire()
