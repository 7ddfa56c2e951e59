"""Generation service: cache, web context, streaming and persistence."""

import asyncio
import functools
import logging
import time
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable

from ....cache import CacheError, ScriptCache, build_cache_key, replay_chunks
from ....config import CacheConfig
from ....generation import HealthGate, ScriptGenerator
from ....models import GenerationRequest
from ....providers import GenerationError, StreamResult
from ....schemas import HookVariations
from ....search import TavilySearch

logger = logging.getLogger(__name__)


class MissingFieldsError(Exception):
    """Required request fields are empty."""

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing


class GenerationTimeoutError(GenerationError):
    """Generation did not finish within the request timeout."""

    pass


@dataclass
class ScriptStream:
    """A streamed response body plus headers and an after-send task."""

    chunks: AsyncIterator[str]
    headers: dict[str, str]
    on_complete: Callable[[], Awaitable[None]] | None = None
    cache_hit: bool = False


class GenerationService:
    """Implements the generate request flow.

    health gate -> field check -> cache lookup -> web search -> generation.
    Cache hits replay the stored JSON; misses stream from the provider and
    store the final object after the response is sent.
    """

    def __init__(
        self,
        generator: ScriptGenerator,
        cache: ScriptCache,
        search: TavilySearch,
        health_gate: HealthGate,
        cache_config: CacheConfig | None = None,
        timeout_seconds: float = 30.0,
    ):
        """Initialize the service.

        Args:
            generator: Script generator.
            cache: Result cache.
            search: Web search client.
            health_gate: Startup health check result.
            cache_config: Replay settings. Uses defaults if not provided.
            timeout_seconds: Upper bound on a provider stream.
        """
        self.generator = generator
        self.cache = cache
        self.search = search
        self.health_gate = health_gate
        self.cache_config = cache_config or CacheConfig()
        self.timeout_seconds = timeout_seconds

    async def generate(self, request: GenerationRequest) -> ScriptStream:
        """Start serving a generate request.

        Raises:
            ServiceUnavailableError: If the startup health check failed.
            MissingFieldsError: If topic, vibe or platform is empty.
            ConfigurationError: If the provider cannot be constructed.
            GenerationError: If the provider fails before producing output.
        """
        self.health_gate.ensure_available()

        missing = request.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

        started = time.perf_counter()
        key = build_cache_key(request)

        cached = await self._lookup(key)
        if cached is not None:
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info("Cache HIT: %s (%dms)", key, elapsed_ms)
            return ScriptStream(
                chunks=replay_chunks(
                    cached,
                    chunk_size=self.cache_config.replay_chunk_size,
                    delay=self.cache_config.replay_delay_seconds,
                ),
                headers={
                    "X-Cache-Status": "HIT",
                    "X-Model": self.generator.model_name(request.tier),
                    "X-Response-Time": f"{elapsed_ms}ms",
                },
                cache_hit=True,
            )

        logger.info("Cache MISS: %s", key)
        web_context = await self.search.search(request.topic)
        logger.info("Web context: %s", "FOUND" if web_context else "NONE")

        request = request.model_copy(update={"web_context": web_context})
        deadline = asyncio.get_running_loop().time() + self.timeout_seconds
        result = await self.generator.generate_script(request)
        chunks = self._bounded_stream(result, deadline)
        first = await self._first_chunk(result, chunks)

        return ScriptStream(
            chunks=_prepend(first, chunks),
            headers={
                "X-Cache-Status": "MISS",
                "X-Model": result.model,
                "X-Web-Context": "FOUND" if web_context else "NONE",
            },
            on_complete=functools.partial(self._store, key, result, deadline),
        )

    async def generate_hooks(self, topic: str, vibe: str) -> HookVariations:
        """Generate five hook variations.

        Raises:
            ServiceUnavailableError: If the startup health check failed.
            MissingFieldsError: If topic or vibe is empty.
            GenerationTimeoutError: If generation exceeds the timeout.
        """
        self.health_gate.ensure_available()

        missing = [name for name, value in (("topic", topic), ("vibe", vibe)) if not value.strip()]
        if missing:
            raise MissingFieldsError(missing)

        try:
            return await asyncio.wait_for(
                self.generator.generate_hook_variations(topic, vibe),
                self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(
                f"Hook generation timed out after {self.timeout_seconds}s"
            ) from e

    async def _lookup(self, key: str) -> dict | None:
        try:
            return await self.cache.get(key)
        except CacheError as e:
            logger.error("Cache lookup failed, treating as miss: %s", e)
            return None

    async def _first_chunk(self, result: StreamResult, chunks: AsyncIterator[str]) -> str:
        """Wait for the first chunk so an early provider failure is raised here.

        Raises:
            GenerationError: If the stream failed before producing any text.
        """
        try:
            return await anext(chunks)
        except StopAsyncIteration:
            pass
        # No output at all; the final object carries the provider error
        await result.final_object()
        raise GenerationError("Provider returned no output")

    async def _bounded_stream(self, result: StreamResult, deadline: float) -> AsyncIterator[str]:
        loop = asyncio.get_running_loop()
        stream = result.text_stream()
        while True:
            remaining = deadline - loop.time()
            try:
                if remaining <= 0:
                    raise asyncio.TimeoutError
                chunk = await asyncio.wait_for(anext(stream), remaining)
            except StopAsyncIteration:
                return
            except asyncio.TimeoutError as e:
                result.cancel()
                logger.error("Generation timed out after %ss", self.timeout_seconds)
                raise GenerationTimeoutError(
                    f"Generation timed out after {self.timeout_seconds}s"
                ) from e
            yield chunk

    async def _store(self, key: str, result: StreamResult, deadline: float) -> None:
        remaining = max(deadline - asyncio.get_running_loop().time(), 0)
        try:
            script = await asyncio.wait_for(result.final_object(), remaining)
        except asyncio.TimeoutError:
            result.cancel()
            logger.error("Generation timed out, nothing cached: %s", key)
            return
        except GenerationError as e:
            logger.error("Generation failed, nothing cached: %s", e)
            return

        try:
            stored = await self.cache.insert(key, script.to_wire())
        except CacheError as e:
            logger.error("Cache write failed: %s", e)
            return

        if stored:
            logger.info("Cached result: %s", key)


async def _prepend(first: str, rest: AsyncIterator[str]) -> AsyncIterator[str]:
    yield first
    async for chunk in rest:
        yield chunk
