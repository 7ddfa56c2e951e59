"""LLM providers and the provider factory."""

import logging
import os
from typing import Mapping

from ..models import ModelTier
from .base import (
    MODEL_MAP,
    ConfigurationError,
    GenerationError,
    HealthStatus,
    LLMProvider,
    ProviderName,
    StreamResult,
    parse_structured_output,
)
from .mock import MockLLMProvider

logger = logging.getLogger(__name__)

API_KEY_ENV: dict[ProviderName, str] = {
    ProviderName.OPENAI: "OPENAI_API_KEY",
    ProviderName.GEMINI: "GOOGLE_GENERATIVE_AI_API_KEY",
}


class ProviderFactory:
    """Builds one provider instance per name, on first use."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        default_tier: ModelTier = ModelTier.FAST,
    ):
        self.env = os.environ if env is None else env
        self.default_tier = default_tier
        self._instances: dict[ProviderName, LLMProvider] = {}

    def get(self, name: ProviderName | str) -> LLMProvider:
        """Get the provider for a name.

        Raises:
            ConfigurationError: If the name is unknown or its API key is missing.
        """
        try:
            provider_name = ProviderName(name)
        except ValueError as e:
            raise ConfigurationError(f"Unknown LLM provider: {name}") from e

        if provider_name not in self._instances:
            self._instances[provider_name] = self._create(provider_name)
        return self._instances[provider_name]

    def register(self, provider: LLMProvider) -> None:
        """Use an already-built provider for its name."""
        self._instances[provider.name] = provider

    def has_credentials(self, name: ProviderName | str) -> bool:
        """Whether the API key for a provider is present."""
        env_key = API_KEY_ENV.get(ProviderName(name))
        return env_key is None or bool(self.env.get(env_key))

    def reset(self) -> None:
        """Drop all cached provider instances."""
        self._instances.clear()

    def _create(self, name: ProviderName) -> LLMProvider:
        if name == ProviderName.MOCK:
            return MockLLMProvider(default_tier=self.default_tier)

        env_key = API_KEY_ENV[name]
        api_key = self.env.get(env_key)
        if not api_key:
            raise ConfigurationError(f"{env_key} not set")

        logger.info("Creating %s provider", name.value)
        if name == ProviderName.OPENAI:
            from .openai_provider import OpenAIProvider

            return OpenAIProvider(api_key, default_tier=self.default_tier)

        from .gemini_provider import GeminiProvider

        return GeminiProvider(api_key, default_tier=self.default_tier)


__all__ = [
    "API_KEY_ENV",
    "MODEL_MAP",
    "ConfigurationError",
    "GenerationError",
    "HealthStatus",
    "LLMProvider",
    "MockLLMProvider",
    "ProviderFactory",
    "ProviderName",
    "StreamResult",
    "parse_structured_output",
]
