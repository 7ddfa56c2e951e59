"""Dependency injection for FastAPI."""

import os
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ...cache import InMemoryScriptCache, ScriptCache, SqlScriptCache
from ...config import Config, load_config
from ...generation import HealthGate, ScriptGenerator
from ...prompts import PromptRegistry, create_default_registry
from ...providers import ProviderFactory
from ...search import TavilySearch
from .config import WebConfig
from .services.generation_service import GenerationService


@lru_cache
def get_config() -> WebConfig:
    """Get the web configuration (cached)."""
    return WebConfig()


@lru_cache
def get_app_config() -> Config:
    """Get the pipeline configuration (cached)."""
    return load_config(get_config().config_path)


@lru_cache
def get_prompt_registry() -> PromptRegistry:
    """Get the prompt registry (cached singleton)."""
    return create_default_registry()


@lru_cache
def get_provider_factory() -> ProviderFactory:
    """Get the provider factory (cached singleton)."""
    return ProviderFactory(default_tier=get_app_config().llm.tier)


@lru_cache
def get_script_generator() -> ScriptGenerator:
    """Get the script generator (cached singleton)."""
    return ScriptGenerator(
        config=get_app_config(),
        registry=get_prompt_registry(),
        factory=get_provider_factory(),
    )


@lru_cache
def get_health_gate() -> HealthGate:
    """Get the startup health gate (cached singleton)."""
    return HealthGate()


@lru_cache
def get_script_cache() -> ScriptCache:
    """Get the result cache (cached singleton)."""
    cache_config = get_app_config().cache
    if cache_config.backend == "sql":
        return SqlScriptCache(cache_config.database_url or os.environ.get("DATABASE_URL"))
    return InMemoryScriptCache()


@lru_cache
def get_web_search() -> TavilySearch:
    """Get the web search client (cached singleton)."""
    return TavilySearch(get_app_config().search)


def get_generation_service(
    config: Annotated[WebConfig, Depends(get_config)],
    app_config: Annotated[Config, Depends(get_app_config)],
    generator: Annotated[ScriptGenerator, Depends(get_script_generator)],
    cache: Annotated[ScriptCache, Depends(get_script_cache)],
    search: Annotated[TavilySearch, Depends(get_web_search)],
    health_gate: Annotated[HealthGate, Depends(get_health_gate)],
) -> GenerationService:
    """Get the generation service."""
    return GenerationService(
        generator=generator,
        cache=cache,
        search=search,
        health_gate=health_gate,
        cache_config=app_config.cache,
        timeout_seconds=config.request_timeout_seconds,
    )


# Type aliases for cleaner router signatures
AppConfigDep = Annotated[Config, Depends(get_app_config)]
ProviderFactoryDep = Annotated[ProviderFactory, Depends(get_provider_factory)]
ScriptCacheDep = Annotated[ScriptCache, Depends(get_script_cache)]
HealthGateDep = Annotated[HealthGate, Depends(get_health_gate)]
GenerationServiceDep = Annotated[GenerationService, Depends(get_generation_service)]
