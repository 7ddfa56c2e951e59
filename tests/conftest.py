"""Shared test fixtures."""

import random

import pytest

from scriptwriter.config import Config
from scriptwriter.generation import ScriptGenerator
from scriptwriter.models import GenerationRequest, VideoDuration
from scriptwriter.prompts import PromptRegistry, create_default_registry
from scriptwriter.providers import MockLLMProvider, ProviderFactory


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-llm-tests",
        action="store_true",
        default=False,
        help="Run LLM integration tests (expensive, makes real API calls)",
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "llm_integration: mark test as requiring real LLM calls"
    )


def pytest_collection_modifyitems(config, items):
    """Skip LLM tests unless --run-llm-tests is provided."""
    if not config.getoption("--run-llm-tests", default=False):
        skip_llm = pytest.mark.skip(
            reason="LLM integration tests skipped. Use --run-llm-tests to run."
        )
        for item in items:
            if "llm_integration" in item.keywords:
                item.add_marker(skip_llm)


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config()


@pytest.fixture
def mock_config() -> Config:
    """Provide a test configuration with mock LLM provider."""
    config = Config()
    config.llm.provider = "mock"
    config.search.enabled = False
    config.cache.replay_delay_seconds = 0
    return config


@pytest.fixture
def registry() -> PromptRegistry:
    """A fresh registry with every built-in fragment."""
    return create_default_registry()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible hook sampling."""
    return random.Random(42)


@pytest.fixture
def mock_provider() -> MockLLMProvider:
    """Recording mock provider."""
    return MockLLMProvider()


@pytest.fixture
def provider_factory(mock_provider: MockLLMProvider) -> ProviderFactory:
    """Factory with no API keys whose mock slot is the recording mock."""
    factory = ProviderFactory(env={})
    factory.register(mock_provider)
    return factory


@pytest.fixture
def generator(
    mock_config: Config,
    registry: PromptRegistry,
    provider_factory: ProviderFactory,
    rng: random.Random,
) -> ScriptGenerator:
    """Script generator wired to the mock provider."""
    return ScriptGenerator(mock_config, registry, provider_factory, rng=rng)


@pytest.fixture
def sample_request() -> GenerationRequest:
    """A typical generate request."""
    return GenerationRequest(
        topic="Drinking ice water after meals",
        vibe="educational",
        platform="tiktok",
        duration=VideoDuration.MEDIUM,
    )
