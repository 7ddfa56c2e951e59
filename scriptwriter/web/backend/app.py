"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import WebConfig
from .dependencies import get_config, get_health_gate, get_script_generator
from .routers import generate_router, health_router

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve(app: FastAPI, dependency: Callable[[], T]) -> T:
    """Call a dependency outside a request, honouring app overrides."""
    return app.dependency_overrides.get(dependency, dependency)()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup: one AI health check; a failure blocks generation until restart
    health_gate = _resolve(app, get_health_gate)
    generator = _resolve(app, get_script_generator)
    await health_gate.run_startup_check(generator)

    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors: 400 with an error message."""
    fields = sorted({".".join(str(part) for part in error["loc"][1:]) or "body" for error in exc.errors()})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {', '.join(fields)}"},
    )


def create_app(config: WebConfig | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Optional configuration. Uses defaults if not provided.

    Returns:
        The FastAPI application.
    """
    if config is None:
        config = get_config()

    app = FastAPI(
        title="Script Writer API",
        description="Streams viral short-form video scripts generated by an LLM",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache-Status", "X-Model", "X-Web-Context", "X-Response-Time"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include routers
    app.include_router(generate_router)
    app.include_router(health_router)

    return app
