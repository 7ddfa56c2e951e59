"""LLM provider abstraction and structured streaming results."""

import asyncio
import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from ..models import ModelTier
from ..schemas import HealthProbe

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

HEALTH_PROMPT = 'Reply with status: "ok"'


class ConfigurationError(Exception):
    """Provider cannot be constructed (unknown name, missing API key)."""

    pass


class GenerationError(Exception):
    """Provider call failed or returned output that does not fit the schema."""

    pass


class ProviderName(str, Enum):
    """Registered providers."""

    OPENAI = "openai"
    GEMINI = "gemini"
    MOCK = "mock"


MODEL_MAP: dict[ProviderName, dict[ModelTier, str]] = {
    ProviderName.OPENAI: {
        ModelTier.FAST: "gpt-4o-mini",
        ModelTier.BALANCED: "gpt-4o",
        ModelTier.PREMIUM: "gpt-4o",
    },
    ProviderName.GEMINI: {
        ModelTier.FAST: "gemini-2.0-flash",
        ModelTier.BALANCED: "gemini-2.5-flash",
        ModelTier.PREMIUM: "gemini-2.5-pro",
    },
    ProviderName.MOCK: {
        ModelTier.FAST: "mock",
        ModelTier.BALANCED: "mock",
        ModelTier.PREMIUM: "mock",
    },
}


@dataclass
class HealthStatus:
    """Outcome of a provider health check."""

    ok: bool
    error: str | None = None


def parse_structured_output(text: str, schema: type[SchemaT]) -> SchemaT:
    """Parse model output into a schema instance.

    Handles responses wrapped in markdown code blocks.

    Args:
        text: Raw response text
        schema: Pydantic model to validate against

    Returns:
        The validated schema instance

    Raises:
        GenerationError: If the text is not JSON or does not fit the schema
    """
    cleaned = text.strip()

    json_block_pattern = r"```(?:json)?\s*([\s\S]*?)```"
    matches = re.findall(json_block_pattern, cleaned)
    if matches:
        cleaned = matches[0].strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Failed to parse JSON response: {e}\nResponse: {text[:500]}") from e

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise GenerationError(f"Response does not match {schema.__name__}: {e}") from e


_END = object()


class StreamResult(Generic[SchemaT]):
    """Streaming structured generation.

    Exposes the raw JSON text as it arrives (text_stream) and the validated
    object once the stream completes (final_object). The provider stream is
    drained by a background task, so final_object() resolves whether or not
    anyone reads the text stream.
    """

    def __init__(self, chunks: AsyncIterator[str], schema: type[SchemaT], model: str):
        self.model = model
        self.schema = schema
        self._queue: asyncio.Queue = asyncio.Queue()
        self._final: asyncio.Future = asyncio.get_running_loop().create_future()
        self._consumed = False
        self._task = asyncio.create_task(self._pump(chunks))

    async def _pump(self, chunks: AsyncIterator[str]) -> None:
        parts: list[str] = []
        try:
            async for chunk in chunks:
                parts.append(chunk)
                self._queue.put_nowait(chunk)
            result = parse_structured_output("".join(parts), self.schema)
        except asyncio.CancelledError:
            self._fail(GenerationError("Generation cancelled"))
            raise
        except GenerationError as e:
            self._fail(e)
        except Exception as e:
            self._fail(GenerationError(f"Provider stream failed: {e}"))
            logger.debug("Provider stream failed", exc_info=True)
        else:
            if not self._final.done():
                self._final.set_result(result)
        finally:
            self._queue.put_nowait(_END)

    def _fail(self, error: Exception) -> None:
        if not self._final.done():
            self._final.set_exception(error)

    async def text_stream(self) -> AsyncIterator[str]:
        """Yield raw JSON text chunks as they arrive. Single consumer only."""
        if self._consumed:
            raise RuntimeError("text_stream() can only be consumed once")
        self._consumed = True
        while True:
            chunk = await self._queue.get()
            if chunk is _END:
                return
            yield chunk

    async def final_object(self) -> SchemaT:
        """Wait for the stream to finish and return the validated object.

        Raises:
            GenerationError: If the call failed, was cancelled or did not validate.
        """
        return await asyncio.shield(self._final)

    def cancel(self) -> None:
        """Abandon the in-flight provider call."""
        if self._task.done():
            return
        self._task.cancel()
        # The pump may not have started yet; settle both outputs here too
        self._fail(GenerationError("Generation cancelled"))
        self._queue.put_nowait(_END)


class LLMProvider(ABC):
    """Abstract base class for structured-output LLM providers."""

    name: ProviderName

    def __init__(self, default_tier: ModelTier = ModelTier.FAST):
        self.default_tier = default_tier

    def model_for(self, tier: ModelTier | None = None) -> str:
        """Concrete model name for a tier."""
        return MODEL_MAP[self.name][tier or self.default_tier]

    async def stream_object(
        self,
        schema: type[SchemaT],
        prompt: str,
        tier: ModelTier | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> StreamResult[SchemaT]:
        """Start a streaming structured generation.

        Args:
            schema: Pydantic model the output must validate against
            prompt: The complete prompt
            tier: Model tier; the provider default if None
            temperature: Optional sampling temperature
            max_tokens: Optional output token limit

        Returns:
            A StreamResult for the in-flight call
        """
        model = self.model_for(tier)
        logger.info("Streaming %s from %s/%s", schema.__name__, self.name.value, model)
        chunks = self._stream_chunks(schema, prompt, model, temperature, max_tokens)
        return StreamResult(chunks, schema, model)

    @abstractmethod
    def _stream_chunks(
        self,
        schema: type[BaseModel],
        prompt: str,
        model: str,
        temperature: float | None,
        max_tokens: int | None,
    ) -> AsyncIterator[str]:
        """Yield raw response text chunks from the provider."""
        pass

    async def health_check(self) -> HealthStatus:
        """Issue a trivial structured call and check the answer."""
        try:
            result = await self.stream_object(HealthProbe, HEALTH_PROMPT, tier=ModelTier.FAST)
            probe = await result.final_object()
        except GenerationError as e:
            return HealthStatus(ok=False, error=str(e))

        if probe.status.strip().lower() != "ok":
            return HealthStatus(ok=False, error=f"Unexpected health probe status: {probe.status}")
        return HealthStatus(ok=True)
