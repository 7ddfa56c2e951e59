"""Tests for the provider abstraction, streaming results and the factory."""

import asyncio
import json

import pytest

from scriptwriter.models import ModelTier
from scriptwriter.providers import (
    MODEL_MAP,
    ConfigurationError,
    GenerationError,
    MockLLMProvider,
    ProviderFactory,
    ProviderName,
    StreamResult,
    parse_structured_output,
)
from scriptwriter.schemas import BaseScriptResult, FullScriptResult, HealthProbe


async def _chunks(*parts: str, delay: float = 0.0):
    for part in parts:
        if delay:
            await asyncio.sleep(delay)
        yield part


class TestParseStructuredOutput:
    def test_plain_json(self):
        probe = parse_structured_output('{"status": "ok"}', HealthProbe)
        assert probe.status == "ok"

    def test_code_fenced_json(self):
        text = 'Here you go:\n```json\n{"status": "ok"}\n```'
        assert parse_structured_output(text, HealthProbe).status == "ok"

    def test_malformed_json_raises_generation_error(self):
        with pytest.raises(GenerationError, match="Failed to parse JSON"):
            parse_structured_output('{"status": ', HealthProbe)

    def test_schema_mismatch_raises_generation_error(self):
        with pytest.raises(GenerationError, match="does not match HealthProbe"):
            parse_structured_output('{"other": 1}', HealthProbe)


class TestStreamResult:
    @pytest.mark.asyncio
    async def test_text_stream_and_final_object(self):
        result = StreamResult(_chunks('{"sta', 'tus": ', '"ok"}'), HealthProbe, model="m")

        text = "".join([chunk async for chunk in result.text_stream()])
        probe = await result.final_object()

        assert text == '{"status": "ok"}'
        assert probe.status == "ok"
        assert result.model == "m"

    @pytest.mark.asyncio
    async def test_final_object_without_consuming_stream(self):
        """final_object() resolves even if nobody reads the text stream."""
        result = StreamResult(_chunks('{"status":', ' "ok"}'), HealthProbe, model="m")
        probe = await result.final_object()
        assert probe.status == "ok"

    @pytest.mark.asyncio
    async def test_text_stream_single_consumer(self):
        result = StreamResult(_chunks('{"status": "ok"}'), HealthProbe, model="m")
        [chunk async for chunk in result.text_stream()]

        with pytest.raises(RuntimeError):
            [chunk async for chunk in result.text_stream()]

    @pytest.mark.asyncio
    async def test_invalid_output_fails_final_object(self):
        result = StreamResult(_chunks('{"nope": true}'), HealthProbe, model="m")

        text = "".join([chunk async for chunk in result.text_stream()])
        assert text == '{"nope": true}'
        with pytest.raises(GenerationError):
            await result.final_object()

    @pytest.mark.asyncio
    async def test_provider_exception_becomes_generation_error(self):
        async def failing():
            yield '{"sta'
            raise ConnectionError("socket closed")

        result = StreamResult(failing(), HealthProbe, model="m")
        with pytest.raises(GenerationError, match="socket closed"):
            await result.final_object()

    @pytest.mark.asyncio
    async def test_cancel_abandons_call(self):
        result = StreamResult(_chunks('{"status":', ' "ok"}', delay=1.0), HealthProbe, model="m")
        result.cancel()

        with pytest.raises(GenerationError, match="cancelled"):
            await result.final_object()
        assert [chunk async for chunk in result.text_stream()] == []


class TestMockProvider:
    @pytest.mark.asyncio
    async def test_records_calls_and_returns_valid_script(self):
        provider = MockLLMProvider()
        result = await provider.stream_object(BaseScriptResult, "prompt text")
        script = await result.final_object()

        assert isinstance(script, BaseScriptResult)
        assert 1 <= script.analysis.viral_score <= 10
        assert len(provider.calls) == 1
        assert provider.calls[0].prompt == "prompt text"
        assert provider.calls[0].schema is BaseScriptResult

    @pytest.mark.asyncio
    async def test_full_schema_includes_visual_prompt(self):
        result = await MockLLMProvider().stream_object(FullScriptResult, "p")
        script = await result.final_object()
        assert script.visual_prompt

    @pytest.mark.asyncio
    async def test_response_override(self):
        provider = MockLLMProvider(responses={HealthProbe: {"status": "degraded"}})
        result = await provider.stream_object(HealthProbe, "p")
        assert (await result.final_object()).status == "degraded"

    @pytest.mark.asyncio
    async def test_streamed_text_is_json(self):
        result = await MockLLMProvider(chunk_size=7).stream_object(BaseScriptResult, "p")
        chunks = [chunk async for chunk in result.text_stream()]

        assert len(chunks) > 1
        assert json.loads("".join(chunks))["hook"]


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_ok(self):
        status = await MockLLMProvider().health_check()
        assert status.ok
        assert status.error is None

    @pytest.mark.asyncio
    async def test_wrong_status_is_failure(self):
        provider = MockLLMProvider(responses={HealthProbe: {"status": "busy"}})
        status = await provider.health_check()

        assert not status.ok
        assert "busy" in status.error

    @pytest.mark.asyncio
    async def test_provider_error_is_failure(self):
        provider = MockLLMProvider(error=GenerationError("quota exceeded"))
        status = await provider.health_check()

        assert not status.ok
        assert "quota exceeded" in status.error


class TestModelMap:
    def test_every_provider_covers_every_tier(self):
        for provider in ProviderName:
            assert set(MODEL_MAP[provider]) == set(ModelTier)

    def test_model_for_tier(self):
        provider = MockLLMProvider()
        assert provider.model_for(ModelTier.PREMIUM) == "mock"
        assert MODEL_MAP[ProviderName.GEMINI][ModelTier.PREMIUM] == "gemini-2.5-pro"
        assert MODEL_MAP[ProviderName.OPENAI][ModelTier.FAST] == "gpt-4o-mini"


class TestProviderFactory:
    def test_missing_key_raises_configuration_error(self):
        factory = ProviderFactory(env={})

        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            factory.get("openai")
        with pytest.raises(ConfigurationError, match="GOOGLE_GENERATIVE_AI_API_KEY"):
            factory.get(ProviderName.GEMINI)

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            ProviderFactory(env={}).get("anthropic")

    def test_singleton_per_name(self):
        factory = ProviderFactory(env={})
        assert factory.get("mock") is factory.get(ProviderName.MOCK)

    def test_reset_clears_instances(self):
        factory = ProviderFactory(env={})
        first = factory.get("mock")
        factory.reset()
        assert factory.get("mock") is not first

    def test_default_tier_passed_to_providers(self):
        factory = ProviderFactory(env={}, default_tier=ModelTier.PREMIUM)
        assert factory.get("mock").default_tier == ModelTier.PREMIUM

    def test_openai_built_from_env(self):
        factory = ProviderFactory(env={"OPENAI_API_KEY": "sk-test"})
        provider = factory.get("openai")

        assert provider.name == ProviderName.OPENAI
        assert provider.model_for(ModelTier.BALANCED) == "gpt-4o"

    def test_gemini_built_from_env(self):
        factory = ProviderFactory(env={"GOOGLE_GENERATIVE_AI_API_KEY": "g-test"})
        provider = factory.get("gemini")

        assert provider.name == ProviderName.GEMINI
        assert provider.model_for() == "gemini-2.0-flash"

    def test_has_credentials(self):
        factory = ProviderFactory(env={"OPENAI_API_KEY": "sk-test"})

        assert factory.has_credentials("openai")
        assert not factory.has_credentials("gemini")
        assert factory.has_credentials("mock")
