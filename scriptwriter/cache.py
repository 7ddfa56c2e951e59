"""
Generated-script cache.

Rows are keyed by a normalized request key and written at most once:
the first stored result for a key wins and later inserts are ignored.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .models import GenerationRequest

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Cache store failure."""

    pass


def build_cache_key(request: GenerationRequest) -> str:
    """Build the cache key for a request.

    Topic is lowercased and trimmed; vibe and platform are used as given.
    Example: "cat video-cat-tiktok-30-60-v0".
    """
    visuals = 1 if request.include_visuals else 0
    return (
        f"{request.topic.lower().strip()}-{request.vibe}-{request.platform}"
        f"-{request.duration.value}-v{visuals}"
    )


async def replay_chunks(
    data: dict[str, Any],
    chunk_size: int = 50,
    delay: float = 0.01,
) -> AsyncIterator[str]:
    """Replay a cached result as a text stream of fixed-size chunks."""
    payload = json.dumps(data, indent=2, ensure_ascii=False)
    for start in range(0, len(payload), chunk_size):
        yield payload[start : start + chunk_size]
        if delay:
            await asyncio.sleep(delay)


class ScriptCache(ABC):
    """Cache contract used by the generation service."""

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any] | None:
        """Get the stored result for a key, or None."""
        pass

    @abstractmethod
    async def insert(self, key: str, data: dict[str, Any]) -> bool:
        """Store a result. Returns False if the key already had one."""
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Check connectivity. Raises CacheError on failure."""
        pass


class InMemoryScriptCache(ScriptCache):
    """Process-local cache."""

    def __init__(self) -> None:
        self._rows: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._rows)

    async def get(self, key: str) -> dict[str, Any] | None:
        return self._rows.get(key)

    async def insert(self, key: str, data: dict[str, Any]) -> bool:
        if key in self._rows:
            return False
        self._rows[key] = data
        return True

    async def ping(self) -> None:
        return None


metadata = MetaData()

cached_results = Table(
    "cached_results",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("cache_key", String(512), nullable=False, unique=True),
    Column("data", JSON, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)


class SqlScriptCache(ScriptCache):
    """Cache stored in a SQL database through SQLAlchemy Core.

    Blocking database calls run in a worker thread. The engine and table
    are created on first use, so an unreachable database surfaces as a
    CacheError from get/insert/ping rather than at construction.
    """

    def __init__(self, database_url: str | None = None, engine: Engine | None = None):
        """Initialize the cache.

        Args:
            database_url: SQLAlchemy URL, e.g. "sqlite:///cache.db".
            engine: Existing engine; takes precedence over database_url.
        """
        self.database_url = database_url
        self._engine = engine
        self._schema_ready = False

    @property
    def engine(self) -> Engine:
        """Engine with the cache table in place.

        Raises:
            CacheError: If no URL is configured or the database is unreachable.
        """
        if self._engine is None:
            if not self.database_url:
                raise CacheError("DATABASE_URL not set")
            try:
                self._engine = create_engine(self.database_url, pool_pre_ping=True)
            except SQLAlchemyError as e:
                raise CacheError(f"Invalid database URL: {e}") from e

        if not self._schema_ready:
            try:
                metadata.create_all(self._engine)
            except SQLAlchemyError as e:
                raise CacheError(f"Database connection failed: {e}") from e
            self._schema_ready = True
        return self._engine

    async def get(self, key: str) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._get, key)

    async def insert(self, key: str, data: dict[str, Any]) -> bool:
        return await asyncio.to_thread(self._insert, key, data)

    async def ping(self) -> None:
        await asyncio.to_thread(self._ping)

    def _get(self, key: str) -> dict[str, Any] | None:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    select(cached_results.c.data).where(cached_results.c.cache_key == key)
                ).first()
        except SQLAlchemyError as e:
            raise CacheError(f"Cache read failed: {e}") from e
        return row[0] if row else None

    def _insert(self, key: str, data: dict[str, Any]) -> bool:
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    cached_results.insert().values(
                        cache_key=key,
                        data=data,
                        created_at=datetime.now(timezone.utc),
                    )
                )
        except IntegrityError:
            logger.info("Cache key already stored, keeping first result: %s", key)
            return False
        except SQLAlchemyError as e:
            raise CacheError(f"Cache write failed: {e}") from e
        return True

    def _ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise CacheError(f"Database connection failed: {e}") from e
