from __future__ import annotations

import asyncio

import pytest

from spp_forecast.infrastructure.cache import TTLCache


class _Clock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_entries_expire_after_ttl() -> None:
    clock = _Clock()
    cache = TTLCache(default_ttl_seconds=60, clock=clock)

    cache.set("a", 1)
    clock.now = 59.0
    assert cache.get("a") == 1

    clock.now = 61.0
    assert cache.get("a") is None
    assert len(cache) == 0


def test_per_entry_ttl_overrides_default() -> None:
    clock = _Clock()
    cache = TTLCache(default_ttl_seconds=60, clock=clock)

    cache.set("short", "x", ttl_seconds=5)
    clock.now = 10.0

    assert "short" not in cache


def test_delete_and_clear() -> None:
    cache = TTLCache(default_ttl_seconds=60)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    assert "a" not in cache
    assert "b" in cache

    cache.clear()
    assert len(cache) == 0


def test_stats_track_hits_and_misses() -> None:
    cache = TTLCache(default_ttl_seconds=60, name="rows")
    cache.set("a", 1)

    cache.get("a")
    cache.get("missing")

    stats = cache.stats()
    assert stats == {
        "name": "rows",
        "size": 1,
        "hits": 1,
        "misses": 1,
        "hit_rate": 0.5,
    }


def test_non_positive_ttl_is_rejected() -> None:
    with pytest.raises(ValueError):
        TTLCache(default_ttl_seconds=0)


@pytest.mark.asyncio
async def test_get_or_set_calls_factory_once() -> None:
    cache = TTLCache(default_ttl_seconds=60)
    calls = 0

    async def factory():
        nonlocal calls
        calls += 1
        return ["row"]

    first = await cache.get_or_set("k", factory)
    second = await cache.get_or_set("k", factory)

    assert first == second == ["row"]
    assert calls == 1


@pytest.mark.asyncio
async def test_get_or_set_shares_concurrent_fills() -> None:
    cache = TTLCache(default_ttl_seconds=60)
    calls = 0

    async def factory():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return "value"

    results = await asyncio.gather(*(cache.get_or_set("k", factory) for _ in range(5)))

    assert results == ["value"] * 5
    assert calls == 1


@pytest.mark.asyncio
async def test_get_or_set_does_not_cache_failures() -> None:
    cache = TTLCache(default_ttl_seconds=60)

    async def failing():
        raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        await cache.get_or_set("k", failing)

    assert "k" not in cache

    async def working():
        return 3

    assert await cache.get_or_set("k", working) == 3


@pytest.mark.asyncio
async def test_get_or_set_releases_fill_locks_after_failures() -> None:
    cache = TTLCache(default_ttl_seconds=60)

    async def failing():
        raise RuntimeError("upstream down")

    for index in range(5):
        with pytest.raises(RuntimeError):
            await cache.get_or_set(f"k{index}", failing)

    assert cache._fill_locks == {}


@pytest.mark.asyncio
async def test_get_or_set_releases_fill_lock_after_concurrent_hit() -> None:
    cache = TTLCache(default_ttl_seconds=60)

    async def slow():
        await asyncio.sleep(0.01)
        return "value"

    await asyncio.gather(*(cache.get_or_set("k", slow) for _ in range(3)))

    assert cache._fill_locks == {}
