"""
Script generation orchestrator.

Resolves the provider and schema for a request, builds the prompt and
starts the structured stream. Retries and caching belong to the caller.
"""

import asyncio
import logging
import random

from .config import Config
from .models import GenerationRequest, ModelTier
from .prompts import (
    PromptBuilder,
    PromptRegistry,
    estimate_tokens,
    get_smart_hook_examples,
    get_style_prompt,
    get_system_prompt,
    get_task_prompt,
    map_vibe_to_style,
)
from .providers import (
    MODEL_MAP,
    ConfigurationError,
    HealthStatus,
    LLMProvider,
    ProviderFactory,
    ProviderName,
    StreamResult,
)
from .schemas import BaseScriptResult, HookVariations, get_script_schema

logger = logging.getLogger(__name__)


class ServiceUnavailableError(Exception):
    """Raised when the startup AI health check failed."""

    def __init__(self, details: str | None = None):
        super().__init__("AI service unavailable")
        self.details = details


class ScriptGenerator:
    """Generates scripts through the configured provider."""

    def __init__(
        self,
        config: Config,
        registry: PromptRegistry,
        factory: ProviderFactory,
        rng: random.Random | None = None,
    ):
        """Initialize the generator.

        Args:
            config: Application configuration (provider, tier, prompt settings).
            registry: Prompt registry built at startup.
            factory: Provider factory.
            rng: Random source for hook sampling.
        """
        self.config = config
        self.registry = registry
        self.factory = factory
        self.builder = PromptBuilder(registry, config.prompts, rng)
        self.rng = rng or random.Random()

    def provider(self) -> LLMProvider:
        """The default provider.

        Raises:
            ConfigurationError: If the provider cannot be constructed.
        """
        return self.factory.get(self.config.llm.provider)

    def model_name(self, tier: ModelTier | None = None) -> str:
        """Model the default provider uses for a tier, without building it."""
        provider = ProviderName(self.config.llm.provider)
        return MODEL_MAP[provider][tier or self.config.llm.tier]

    async def generate_script(self, request: GenerationRequest) -> StreamResult[BaseScriptResult]:
        """Start generating a script.

        Args:
            request: Validated generation request.

        Returns:
            A StreamResult yielding raw JSON text and the validated script.

        Raises:
            ConfigurationError: If the provider cannot be constructed.
        """
        provider = self.provider()
        tier = request.tier or self.config.llm.tier
        schema = get_script_schema(request.include_visuals)
        prompt = self.builder.build(request)

        logger.info(
            "Generating %s with %s (~%d prompt tokens)",
            schema.__name__,
            provider.model_for(tier),
            estimate_tokens(prompt),
        )
        return await provider.stream_object(
            schema,
            prompt,
            tier=tier,
            temperature=self.config.llm.temperature,
            max_tokens=self.config.llm.max_tokens,
        )

    async def generate_hook_variations(self, topic: str, vibe: str) -> HookVariations:
        """Generate five hooks for a topic, one per framework.

        Raises:
            ConfigurationError: If the provider cannot be constructed.
            GenerationError: If the call fails or the output does not validate.
        """
        provider = self.provider()
        _, examples = get_smart_hook_examples(
            topic,
            count=self.config.prompts.hook_examples,
            rng=self.rng,
            max_topic_chars=self.config.prompts.topic_preview_chars,
        )
        example_lines = "\n".join(f"- {hook}" for hook in examples)
        prompt = "\n\n".join(
            [
                get_system_prompt(self.registry, "creator"),
                get_style_prompt(self.registry, map_vibe_to_style(vibe)),
                get_task_prompt(self.registry, "hooks"),
                f'TOPIC: "{topic}"\nVIBE: {vibe}',
                f"EXAMPLE HOOKS (patterns only):\n{example_lines}",
                'OUTPUT FORMAT (JSON): {"hooks": [{"text": string, "framework": string}, ...5 items]}',
            ]
        )

        logger.info("Generating hook variations (~%d prompt tokens)", estimate_tokens(prompt))
        result = await provider.stream_object(
            HookVariations,
            prompt,
            temperature=self.config.llm.temperature,
            max_tokens=self.config.llm.max_tokens,
        )
        try:
            return await result.final_object()
        except asyncio.CancelledError:
            result.cancel()
            raise

    async def check_ai_health(self) -> HealthStatus:
        """Health-check the default provider."""
        return await self.provider().health_check()


class HealthGate:
    """Result of the one-time startup health check.

    The check runs once during application startup. A failure blocks every
    generation until the process restarts; there is no re-probe.
    """

    def __init__(self) -> None:
        self.checked = False
        self.passed = False
        self.error: str | None = None

    async def run_startup_check(self, generator: ScriptGenerator) -> HealthStatus:
        """Run the provider health check and record the outcome."""
        try:
            status = await generator.check_ai_health()
        except ConfigurationError as e:
            status = HealthStatus(ok=False, error=str(e))

        self.checked = True
        self.passed = status.ok
        self.error = status.error
        if status.ok:
            logger.info("AI startup health check passed")
        else:
            logger.error("AI startup health check failed: %s", status.error)
        return status

    def ensure_available(self) -> None:
        """Raise if the recorded startup check failed.

        Raises:
            ServiceUnavailableError: If the check ran and failed.
        """
        if self.checked and not self.passed:
            raise ServiceUnavailableError(self.error)
