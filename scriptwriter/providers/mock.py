"""Mock provider returning canned structured output."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, AsyncIterator

from pydantic import BaseModel

from ..models import ModelTier
from ..schemas import BaseScriptResult, FullScriptResult, HealthProbe, HookVariations
from .base import GenerationError, LLMProvider, ProviderName


@dataclass
class RecordedCall:
    """One stream_object call seen by the mock."""

    schema: type[BaseModel]
    prompt: str
    model: str


class MockLLMProvider(LLMProvider):
    """Mock provider for tests and offline runs.

    Returns realistic but generic responses for the known schemas and
    records every call so tests can assert on the prompt.
    """

    name = ProviderName.MOCK

    def __init__(
        self,
        default_tier: ModelTier = ModelTier.FAST,
        responses: dict[type[BaseModel], dict[str, Any] | str] | None = None,
        error: Exception | None = None,
        chunk_size: int = 40,
        chunk_delay: float = 0.0,
    ):
        """Initialize the mock.

        Args:
            default_tier: Tier used when a call gives none.
            responses: Per-schema overrides, as a dict or raw text.
            error: If set, raised from the stream instead of any output.
            chunk_size: Characters per streamed chunk.
            chunk_delay: Seconds to sleep between chunks.
        """
        super().__init__(default_tier)
        self.responses = responses or {}
        self.error = error
        self.chunk_size = chunk_size
        self.chunk_delay = chunk_delay
        self.calls: list[RecordedCall] = []

    async def _stream_chunks(
        self,
        schema: type[BaseModel],
        prompt: str,
        model: str,
        temperature: float | None,
        max_tokens: int | None,
    ) -> AsyncIterator[str]:
        self.calls.append(RecordedCall(schema=schema, prompt=prompt, model=model))
        if self.error is not None:
            raise self.error

        text = self._response_text(schema)
        for start in range(0, len(text), self.chunk_size):
            if self.chunk_delay:
                await asyncio.sleep(self.chunk_delay)
            yield text[start : start + self.chunk_size]

    def _response_text(self, schema: type[BaseModel]) -> str:
        override = self.responses.get(schema)
        if isinstance(override, str):
            return override
        if override is not None:
            return json.dumps(override)

        if issubclass(schema, HealthProbe):
            return json.dumps({"status": "ok"})
        if issubclass(schema, HookVariations):
            return json.dumps(self._mock_hooks())
        if issubclass(schema, FullScriptResult):
            return json.dumps({**self._mock_script(), "visualPrompt": self._mock_visual_prompt()})
        if issubclass(schema, BaseScriptResult):
            return json.dumps(self._mock_script())
        raise GenerationError(f"Mock provider has no response for {schema.__name__}")

    @staticmethod
    def _mock_script() -> dict[str, Any]:
        return {
            "hook": "Stop drinking ice water after meals if you want a healthy stomach!",
            "script": (
                "Cold water right after eating slows your digestion down.\n"
                "Your body spends energy warming it back to 37 degrees.\n"
                "Switch to warm water for one week and feel the difference."
            ),
            "cta": "Follow so you don't miss part 2!",
            "analysis": {
                "hookPsychology": "Negative warning about a daily habit creates instant concern",
                "viralScore": 8,
                "audienceInsight": "Office workers aged 22-35 who care about health",
                "viralFramework": "Negative Hook",
            },
            "scenario_detected": "KNOWLEDGE",
        }

    @staticmethod
    def _mock_visual_prompt() -> str:
        return (
            "Close-up of a glass of ice water on an office desk, soft morning light, "
            "slow push in, cool blue color grading, shallow depth of field"
        )

    @staticmethod
    def _mock_hooks() -> dict[str, Any]:
        return {
            "hooks": [
                {"text": "Stop doing this before it's too late!", "framework": "Negative Hook"},
                {"text": "The secret nobody tells you about this...", "framework": "Curiosity Gap"},
                {"text": "9 out of 10 people get this wrong.", "framework": "Social Proof"},
                {"text": "Unpopular opinion: this is overrated.", "framework": "Polarization"},
                {"text": "I tried this for 30 days and here's what changed.", "framework": "Transformation"},
            ]
        }
