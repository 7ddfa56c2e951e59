"""Service health router."""

import os
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ....cache import CacheError
from ....providers import API_KEY_ENV, ProviderName
from ..dependencies import AppConfigDep, HealthGateDep, ProviderFactoryDep, ScriptCacheDep
from ..models.responses import HealthCheckItem, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    app_config: AppConfigDep,
    factory: ProviderFactoryDep,
    cache: ScriptCacheDep,
    health_gate: HealthGateDep,
) -> JSONResponse:
    """Report configuration, cache connectivity and the AI startup check."""
    checks: dict[str, HealthCheckItem] = {}

    provider = ProviderName(app_config.llm.provider)
    env_key = API_KEY_ENV.get(provider)
    if env_key is not None:
        checks["apiKey"] = (
            HealthCheckItem(status="ok", message=f"{env_key} is set")
            if factory.has_credentials(provider)
            else HealthCheckItem(status="error", message=f"{env_key} is missing")
        )

    if app_config.cache.backend == "sql":
        checks["database"] = (
            HealthCheckItem(status="ok", message="Database URL is configured")
            if app_config.cache.database_url or os.environ.get("DATABASE_URL")
            else HealthCheckItem(status="error", message="DATABASE_URL is missing")
        )

    try:
        await cache.ping()
        checks["cacheConnection"] = HealthCheckItem(status="ok", message="Cache connection successful")
    except CacheError as e:
        checks["cacheConnection"] = HealthCheckItem(status="error", message=str(e))

    if health_gate.passed:
        checks["aiStartupCheck"] = HealthCheckItem(status="ok", message="AI startup check passed")
    else:
        checks["aiStartupCheck"] = HealthCheckItem(
            status="error",
            message=health_gate.error or "AI startup check has not run",
        )

    healthy = all(check.status == "ok" for check in checks.values())
    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
