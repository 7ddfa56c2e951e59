"""Tavily web search for grounding scripts about trending topics."""

import logging
import os
from typing import Any, Mapping

import httpx

from .config import SearchConfig

logger = logging.getLogger(__name__)

TAVILY_URL = "https://api.tavily.com/search"


class TavilySearch:
    """Fetches a short factual context for a topic.

    Every failure (missing key, HTTP error, transport error) yields None so
    generation can continue without context.
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        api_key: str | None = None,
        env: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Search settings. Uses defaults if not provided.
            api_key: Tavily key; read from TAVILY_API_KEY if None.
            env: Environment mapping used to look up the key.
            transport: Optional httpx transport (tests).
        """
        self.config = config or SearchConfig()
        env = os.environ if env is None else env
        self.api_key = api_key or env.get("TAVILY_API_KEY")
        self._transport = transport

    def build_query(self, topic: str) -> str:
        return f"{topic} tiktok trend viral context"

    async def search(self, topic: str) -> str | None:
        """Search the web for a topic and format the results.

        Returns:
            Formatted context, or None if unavailable.
        """
        if not self.config.enabled:
            return None
        if not self.api_key:
            logger.warning("TAVILY_API_KEY not set, skipping web search")
            return None

        query = self.build_query(topic)
        logger.info("Tavily search: %s", query)
        payload = {
            "api_key": self.api_key,
            "query": query,
            "search_depth": self.config.search_depth,
            "include_answer": True,
            "max_results": self.config.max_results,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(TAVILY_URL, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Tavily error: %s", e.response.status_code)
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Tavily failed: %s", e)
            return None

        return self.format_context(data)

    def format_context(self, data: Any) -> str | None:
        """Format a Tavily response as a SUMMARY/DETAILS block."""
        if not isinstance(data, dict):
            logger.error("Tavily returned unexpected payload: %s", type(data).__name__)
            return None

        context = ""

        answer = data.get("answer")
        if answer:
            context += f"SUMMARY: {answer}\n\n"

        results = data.get("results")
        if not isinstance(results, list):
            results = []
        results = [result for result in results if isinstance(result, dict)]
        if results:
            context += "DETAILS:\n"
            for i, result in enumerate(results[: self.config.max_snippets], start=1):
                title = result.get("title", "")
                content = (result.get("content") or "")[: self.config.snippet_chars]
                context += f"{i}. {title}\n   {content}...\n\n"

        return context.strip() or None
