"""Tests for prompt assembly."""

import random

import pytest

from scriptwriter.models import GenerationRequest, VideoDuration
from scriptwriter.prompts import (
    PromptBuilder,
    PromptCategory,
    PromptMetadata,
    PromptRegistry,
    RegisteredPrompt,
    build_prompt,
    estimate_tokens,
)
from scriptwriter.prompts.styles import register_style_prompts
from scriptwriter.prompts.system import CREATOR_PERSONA, STORYTELLER_PERSONA
from scriptwriter.prompts.tasks import register_task_prompts


def _request(**overrides) -> GenerationRequest:
    fields = {
        "topic": "Morning coffee habits",
        "vibe": "educational",
        "platform": "tiktok",
        "duration": VideoDuration.MEDIUM,
    }
    fields.update(overrides)
    return GenerationRequest(**fields)


@pytest.fixture
def builder(registry) -> PromptBuilder:
    return PromptBuilder(registry, rng=random.Random(0))


class TestDurationStructure:
    """The length constraint follows the duration bucket."""

    def test_short_uses_bullets(self, builder):
        prompt = builder.build(_request(duration=VideoDuration.SHORT))

        assert "LENGTH CONSTRAINT (15-30 seconds)" in prompt
        assert "3-4 bullet points" in prompt
        assert "under 15 words" in prompt

    def test_medium_uses_intro_bullets_closing(self, builder):
        prompt = builder.build(_request(duration=VideoDuration.MEDIUM))

        assert "LENGTH CONSTRAINT (30-60 seconds)" in prompt
        assert "1 intro sentence, then 3-5 bullet points" in prompt
        assert "3-4 bullet points" not in prompt

    def test_long_uses_paragraphs_without_bullets(self, builder):
        prompt = builder.build(_request(duration=VideoDuration.LONG))

        assert "LENGTH CONSTRAINT (60-90 seconds)" in prompt
        assert "3-4 spoken paragraphs" in prompt
        assert "Do NOT use bullet points" in prompt
        assert "3-4 bullet points" not in prompt

    @pytest.mark.parametrize("vibe", ["expert", "savage", "storytime", "drama", "funny"])
    def test_long_never_asks_for_short_bullets(self, builder, vibe):
        """No archetype reintroduces the short-form bullet rule."""
        prompt = builder.build(_request(duration=VideoDuration.LONG, vibe=vibe))
        assert "3-4 bullet points" not in prompt

    def test_every_profile_has_an_example(self, builder):
        for duration in VideoDuration:
            prompt = builder.build(_request(duration=duration))
            assert f"EXAMPLE BODY ({duration.value} seconds)" in prompt


class TestAssembly:
    """Section content and order."""

    def test_sections_in_order(self, builder):
        prompt = builder.build(_request(web_context="SUMMARY: coffee facts"))

        markers = [
            "ROLE: Viral Content Strategist",
            "STYLE: Educational with insight",
            "LENGTH CONSTRAINT (30-60 seconds)",
            "SAFETY RULES",
            "CONTEXT FROM WEB SEARCH",
            "USER INPUT",
            "EXAMPLE HOOKS",
            "TASK: Write a VIRAL short video script",
            "OUTPUT FORMAT",
        ]
        positions = [prompt.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_user_inputs_present(self, builder):
        prompt = builder.build(_request(topic="Cold showers", platform="youtube"))

        assert '- Topic: "Cold showers"' in prompt
        assert "- Platform: youtube" in prompt
        assert "- Duration: 30-60 seconds" in prompt

    def test_unknown_platform_passed_through(self, builder):
        prompt = builder.build(_request(platform="threads"))
        assert "- Platform: threads" in prompt

    def test_web_context_present(self, builder):
        prompt = builder.build(_request(web_context="SUMMARY: caffeine peaks after 45 minutes"))

        assert "SUMMARY: caffeine peaks after 45 minutes" in prompt
        assert "Do NOT invent information" in prompt
        assert "NO WEB CONTEXT AVAILABLE" not in prompt

    def test_web_context_absent(self, builder):
        prompt = builder.build(_request())

        assert "NO WEB CONTEXT AVAILABLE" in prompt
        assert "CONTEXT FROM WEB SEARCH" not in prompt

    def test_safety_rules_cover_savage_tone(self, builder):
        prompt = builder.build(_request(vibe="savage"))
        assert "NEVER attack specific individuals" in prompt

    def test_visual_fields_only_with_visuals(self, builder):
        without = builder.build(_request(include_visuals=False))
        with_visuals = builder.build(_request(include_visuals=True))

        assert "visualPrompt" not in without
        assert "VISUAL PROMPT (English)" in with_visuals
        assert "- visualPrompt (string)" in with_visuals

    def test_output_format_lists_analysis_fields(self, builder):
        prompt = builder.build(_request())
        for name in ("hookPsychology", "viralScore", "audienceInsight", "viralFramework", "scenario_detected"):
            assert name in prompt

    def test_hook_examples_count_follows_config(self, registry):
        from scriptwriter.config import PromptConfig

        builder = PromptBuilder(registry, PromptConfig(hook_examples=2), rng=random.Random(0))
        prompt = builder.build(_request())
        hooks_block = prompt.split("EXAMPLE HOOKS")[1].split("=" * 63)[0]

        assert "1. " in hooks_block and "2. " in hooks_block
        assert "3. " not in hooks_block


class TestArchetypes:
    """Explicit archetype vibes."""

    def test_savage_mode_block(self, builder):
        prompt = builder.build(_request(vibe="savage"))

        assert "CURRENT MODE: SAVAGE" in prompt
        assert "expected: OPINION" in prompt

    def test_storytime_uses_storyteller_persona(self, builder):
        prompt = builder.build(_request(vibe="storytime"))

        assert prompt.startswith(STORYTELLER_PERSONA)
        assert "CURRENT MODE: STORYTIME" in prompt

    def test_plain_vibe_has_no_mode_block(self, builder):
        prompt = builder.build(_request(vibe="funny"))
        assert "CURRENT MODE" not in prompt

    def test_story_topic_uses_storyteller_persona(self, builder):
        prompt = builder.build(_request(topic="My boyfriend forgot my birthday", vibe="funny"))

        assert prompt.startswith(STORYTELLER_PERSONA)
        assert "expected: STORY" in prompt

    def test_unknown_vibe_does_not_raise(self, builder):
        prompt = builder.build(_request(vibe="zany-chaotic"))
        assert "STYLE: Smart humor" in prompt

    def test_missing_persona_falls_back_to_creator(self, caplog):
        registry = PromptRegistry()
        register_style_prompts(registry)
        register_task_prompts(registry)
        registry.register(
            "system:creator_v1",
            RegisteredPrompt(
                content=CREATOR_PERSONA,
                metadata=PromptMetadata(
                    version="CREATOR_V1",
                    category=PromptCategory.SYSTEM,
                    description="creator",
                    token_estimate=400,
                    created_at="2024-12-29",
                ),
            ),
        )

        prompt = build_prompt(_request(vibe="storytime"), registry, rng=random.Random(0))

        assert prompt.startswith(CREATOR_PERSONA)
        assert "Persona not found: storyteller" in caplog.text


class TestEstimateTokens:
    def test_four_chars_per_token_rounded_up(self):
        assert estimate_tokens("") == 0
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    def test_full_prompt_estimate_is_positive(self, builder):
        assert estimate_tokens(builder.build(_request())) > 100
