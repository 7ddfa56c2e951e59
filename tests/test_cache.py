"""Tests for the result cache."""

import json

import pytest

from scriptwriter.cache import (
    CacheError,
    InMemoryScriptCache,
    SqlScriptCache,
    build_cache_key,
    replay_chunks,
)
from scriptwriter.models import GenerationRequest, VideoDuration


def _request(**overrides) -> GenerationRequest:
    fields = {"topic": "Cat Video", "vibe": "cat", "platform": "tiktok"}
    fields.update(overrides)
    return GenerationRequest(**fields)


class TestCacheKey:
    def test_documented_example(self):
        assert build_cache_key(_request()) == "cat video-cat-tiktok-30-60-v0"

    def test_topic_normalized(self):
        """Case and surrounding whitespace of the topic do not matter."""
        assert build_cache_key(_request(topic="  CAT video ")) == build_cache_key(_request())

    def test_visuals_flag(self):
        assert build_cache_key(_request(include_visuals=True)).endswith("-v1")

    def test_duration_included(self):
        assert build_cache_key(_request(duration=VideoDuration.LONG)) == "cat video-cat-tiktok-60-90-v0"

    def test_vibe_and_platform_not_normalized(self):
        assert build_cache_key(_request(vibe="Cat")) != build_cache_key(_request())

    def test_platform_changes_key(self):
        assert build_cache_key(_request(platform="youtube")) != build_cache_key(_request())

    def test_topic_changes_key(self):
        assert build_cache_key(_request(topic="cat")) != build_cache_key(_request(topic="dog"))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"topic": "Dog video"},
            {"vibe": "funny"},
            {"platform": "facebook"},
            {"duration": VideoDuration.SHORT},
            {"include_visuals": True},
        ],
    )
    def test_each_field_changes_key(self, overrides):
        assert build_cache_key(_request(**overrides)) != build_cache_key(_request())


class TestReplayChunks:
    @pytest.mark.asyncio
    async def test_fixed_size_chunks_of_pretty_json(self):
        data = {"hook": "Xin chào", "script": "a" * 120}
        chunks = [chunk async for chunk in replay_chunks(data, chunk_size=50, delay=0)]

        assert all(len(chunk) == 50 for chunk in chunks[:-1])
        assert "".join(chunks) == json.dumps(data, indent=2, ensure_ascii=False)
        assert "Xin chào" in "".join(chunks)


class TestInMemoryCache:
    @pytest.mark.asyncio
    async def test_get_insert(self):
        cache = InMemoryScriptCache()
        assert await cache.get("k") is None

        assert await cache.insert("k", {"hook": "h"})
        assert await cache.get("k") == {"hook": "h"}

    @pytest.mark.asyncio
    async def test_first_write_wins(self):
        cache = InMemoryScriptCache()
        await cache.insert("k", {"hook": "first"})

        assert not await cache.insert("k", {"hook": "second"})
        assert await cache.get("k") == {"hook": "first"}
        assert len(cache) == 1


class TestSqlCache:
    @pytest.fixture
    def cache(self, tmp_path) -> SqlScriptCache:
        return SqlScriptCache(f"sqlite:///{tmp_path / 'cache.db'}")

    @pytest.mark.asyncio
    async def test_get_insert(self, cache):
        data = {"hook": "h", "analysis": {"viralScore": 8}}
        assert await cache.get("k") is None

        assert await cache.insert("k", data)
        assert await cache.get("k") == data

    @pytest.mark.asyncio
    async def test_duplicate_insert_ignored(self, cache):
        await cache.insert("k", {"hook": "first"})

        assert not await cache.insert("k", {"hook": "second"})
        assert await cache.get("k") == {"hook": "first"}

    @pytest.mark.asyncio
    async def test_ping(self, cache):
        await cache.ping()

    @pytest.mark.asyncio
    async def test_requires_url(self):
        cache = SqlScriptCache(None)
        with pytest.raises(CacheError, match="DATABASE_URL"):
            await cache.get("k")

    @pytest.mark.asyncio
    async def test_unreachable_database_raises_cache_error(self, tmp_path):
        """Construction succeeds; every operation reports a CacheError."""
        cache = SqlScriptCache(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'cache.db'}")

        with pytest.raises(CacheError):
            await cache.get("k")
        with pytest.raises(CacheError):
            await cache.insert("k", {"hook": "h"})
        with pytest.raises(CacheError, match="Database connection failed"):
            await cache.ping()
