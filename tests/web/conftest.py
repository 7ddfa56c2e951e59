"""Test fixtures for web backend tests."""

from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from scriptwriter.cache import InMemoryScriptCache, ScriptCache
from scriptwriter.config import Config, SearchConfig
from scriptwriter.generation import HealthGate, ScriptGenerator
from scriptwriter.providers import MockLLMProvider, ProviderFactory
from scriptwriter.search import TavilySearch
from scriptwriter.web.backend import dependencies
from scriptwriter.web.backend.app import create_app
from scriptwriter.web.backend.config import WebConfig
from scriptwriter.web.backend.dependencies import (
    get_app_config,
    get_config,
    get_health_gate,
    get_provider_factory,
    get_script_cache,
    get_script_generator,
    get_web_search,
)


@pytest.fixture
def script_cache() -> InMemoryScriptCache:
    """Empty in-memory cache."""
    return InMemoryScriptCache()


@pytest.fixture
def health_gate() -> HealthGate:
    """Fresh health gate; the app lifespan runs the check."""
    return HealthGate()


@pytest.fixture
def web_search() -> TavilySearch:
    """Web search that always finds nothing."""
    return TavilySearch(SearchConfig(enabled=False))


@pytest.fixture
def found_search() -> TavilySearch:
    """Web search backed by a canned Tavily response."""
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            200,
            json={"answer": "Coffee contains caffeine.", "results": []},
        )
    )
    return TavilySearch(api_key="tvly-test", transport=transport)


@pytest.fixture
def make_client(
    mock_config: Config,
    registry,
    script_cache: InMemoryScriptCache,
    health_gate: HealthGate,
    web_search: TavilySearch,
) -> Generator[Callable[..., TestClient], None, None]:
    """Build a test client around a given provider, search client and cache."""
    clients: list[TestClient] = []

    def _make(
        provider: MockLLMProvider | None = None,
        search: TavilySearch | None = None,
        config: Config | None = None,
        cache: ScriptCache | None = None,
    ) -> TestClient:
        # Clear cached singletons
        dependencies.get_config.cache_clear()
        dependencies.get_app_config.cache_clear()
        dependencies.get_script_generator.cache_clear()
        dependencies.get_health_gate.cache_clear()

        app_config = config or mock_config
        factory = ProviderFactory(env={})
        factory.register(provider or MockLLMProvider())
        generator = ScriptGenerator(app_config, registry, factory)

        app = create_app(WebConfig(request_timeout_seconds=5))
        app.dependency_overrides[get_config] = lambda: WebConfig(request_timeout_seconds=5)
        app.dependency_overrides[get_app_config] = lambda: app_config
        app.dependency_overrides[get_provider_factory] = lambda: factory
        app.dependency_overrides[get_script_generator] = lambda: generator
        app.dependency_overrides[get_script_cache] = lambda: cache if cache is not None else script_cache
        app.dependency_overrides[get_web_search] = lambda: search or web_search
        app.dependency_overrides[get_health_gate] = lambda: health_gate

        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    # Cleanup
    for client in clients:
        client.app.dependency_overrides.clear()
        client.__exit__(None, None, None)


@pytest.fixture
def test_client(make_client, mock_provider: MockLLMProvider) -> TestClient:
    """Client whose provider is the recording mock."""
    return make_client(mock_provider)
