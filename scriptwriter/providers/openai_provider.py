"""OpenAI chat-completions provider."""

from typing import AsyncIterator

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel

from ..models import ModelTier
from .base import GenerationError, LLMProvider, ProviderName


class OpenAIProvider(LLMProvider):
    """Streams JSON-schema constrained completions from OpenAI."""

    name = ProviderName.OPENAI

    def __init__(self, api_key: str, default_tier: ModelTier = ModelTier.FAST):
        super().__init__(default_tier)
        self._client = AsyncOpenAI(api_key=api_key)

    async def _stream_chunks(
        self,
        schema: type[BaseModel],
        prompt: str,
        model: str,
        temperature: float | None,
        max_tokens: int | None,
    ) -> AsyncIterator[str]:
        kwargs = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            stream = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema.__name__,
                        "schema": schema.model_json_schema(by_alias=True),
                        "strict": False,
                    },
                },
                stream=True,
                **kwargs,
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except OpenAIError as e:
            raise GenerationError(f"OpenAI request failed: {e}") from e
