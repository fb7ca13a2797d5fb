"""Unit tests for the in-memory store and read-through cache."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from contest_aggregator.infrastructure.cache import MemoryCacheStore, ReadThroughCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryCacheStore(max_entries=3, clock=clock)


class TestMemoryCacheStore:
    @pytest.mark.asyncio
    async def test_entries_expire_after_ttl(self, store, clock):
        await store.set("contest.list", [1, 2], ttl=60)

        clock.now += 59
        assert await store.get("contest.list") == [1, 2]

        clock.now += 1
        assert await store.get("contest.list") is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_evicts_least_recently_used(self, store):
        for key in ("a", "b", "c"):
            await store.set(key, key, ttl=60)

        await store.get("a")
        await store.set("d", "d", ttl=60)

        assert await store.get("b") is None
        assert await store.get("a") == "a"
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_zero_ttl_is_not_stored(self, store):
        await store.set("a", "a", ttl=0)

        assert await store.get("a") is None

    @pytest.mark.asyncio
    async def test_clear(self, store):
        await store.set("a", "a", ttl=60)
        await store.clear()

        assert await store.get("a") is None


class TestReadThroughCache:
    @pytest.mark.asyncio
    async def test_loads_once_within_ttl(self, store):
        cache = ReadThroughCache(store)
        loader = AsyncMock(return_value={"title": "A"})

        first = await cache.get_or_load("problem:1:A", loader, ttl=3600)
        second = await cache.get_or_load("problem:1:A", loader, ttl=3600)

        assert first == second == {"title": "A"}
        assert loader.await_count == 1

    @pytest.mark.asyncio
    async def test_reloads_after_expiry(self, store, clock):
        cache = ReadThroughCache(store)
        loader = AsyncMock(side_effect=[["old"], ["new"]])

        assert await cache.get_or_load("contest.list", loader, ttl=60) == ["old"]
        clock.now += 61
        assert await cache.get_or_load("contest.list", loader, ttl=60) == ["new"]

    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_load(self, store):
        cache = ReadThroughCache(store)
        started = asyncio.Event()
        release = asyncio.Event()
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            started.set()
            await release.wait()
            return ["contest"]

        first = asyncio.create_task(cache.get_or_load("contest.list", loader, ttl=60))
        await started.wait()
        second = asyncio.create_task(cache.get_or_load("contest.list", loader, ttl=60))
        await asyncio.sleep(0)
        release.set()

        assert await asyncio.gather(first, second) == [["contest"], ["contest"]]
        assert calls == 1

    @pytest.mark.asyncio
    async def test_failed_load_is_not_cached(self, store):
        cache = ReadThroughCache(store)
        loader = AsyncMock(side_effect=[RuntimeError("boom"), ["ok"]])

        with pytest.raises(RuntimeError):
            await cache.get_or_load("contest.list", loader, ttl=60)

        assert await cache.get_or_load("contest.list", loader, ttl=60) == ["ok"]
        assert loader.await_count == 2

    @pytest.mark.asyncio
    async def test_cancelling_one_waiter_keeps_shared_load(self, store):
        cache = ReadThroughCache(store)
        started = asyncio.Event()
        release = asyncio.Event()

        async def loader():
            started.set()
            await release.wait()
            return "value"

        first = asyncio.create_task(cache.get_or_load("k", loader, ttl=60))
        await started.wait()
        second = asyncio.create_task(cache.get_or_load("k", loader, ttl=60))
        await asyncio.sleep(0)

        first.cancel()
        await asyncio.sleep(0)
        release.set()

        assert await second == "value"
        with pytest.raises(asyncio.CancelledError):
            await first

    @pytest.mark.asyncio
    async def test_cancelling_last_waiter_cancels_load(self, store):
        cache = ReadThroughCache(store)
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def loader():
            started.set()
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        waiter = asyncio.create_task(cache.get_or_load("k", loader, ttl=60))
        await started.wait()
        waiter.cancel()

        with pytest.raises(asyncio.CancelledError):
            await waiter
        await asyncio.wait_for(cancelled.wait(), timeout=1)

    @pytest.mark.asyncio
    async def test_store_failures_fall_back_to_loader(self):
        broken = AsyncMock()
        broken.get.side_effect = ConnectionError("redis down")
        broken.set.side_effect = ConnectionError("redis down")
        cache = ReadThroughCache(broken)

        assert await cache.get_or_load("k", AsyncMock(return_value="v"), ttl=60) == "v"
