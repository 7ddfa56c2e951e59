"""Google Gemini provider."""

from typing import AsyncIterator

from google import genai
from google.genai import errors, types
from pydantic import BaseModel

from ..models import ModelTier
from .base import GenerationError, LLMProvider, ProviderName


class GeminiProvider(LLMProvider):
    """Streams JSON responses from Gemini with a response schema."""

    name = ProviderName.GEMINI

    def __init__(self, api_key: str, default_tier: ModelTier = ModelTier.FAST):
        super().__init__(default_tier)
        self._client = genai.Client(api_key=api_key)

    async def _stream_chunks(
        self,
        schema: type[BaseModel],
        prompt: str,
        model: str,
        temperature: float | None,
        max_tokens: int | None,
    ) -> AsyncIterator[str]:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
            temperature=temperature,
            max_output_tokens=max_tokens,
        )
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=model,
                contents=prompt,
                config=config,
            )
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except errors.APIError as e:
            raise GenerationError(f"Gemini request failed: {e}") from e
