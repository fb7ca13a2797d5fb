"""Read-through cache with TTL expiry and single-flight loading."""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from contest_aggregator.infrastructure.interfaces import CacheStoreProtocol


class MemoryCacheStore:
    """Bounded in-process store. Oldest-used entries are evicted first."""

    def __init__(self, max_entries: int = 1024, clock: Callable[[], float] = time.monotonic):
        self.max_entries = max_entries
        self.clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if expires_at <= self.clock():
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        return value

    async def set(self, key: str, value: Any, ttl: float) -> None:
        if ttl <= 0:
            return
        self._entries[key] = (self.clock() + ttl, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cache entry {evicted}")

    async def clear(self) -> None:
        self._entries.clear()

    async def close(self) -> None:
        self._entries.clear()


@dataclass
class _Flight:
    task: asyncio.Future
    waiters: int = 0


class ReadThroughCache:
    """Serves values from a store, loading misses at most once per key at a time."""

    def __init__(self, store: CacheStoreProtocol):
        self.store = store
        self._inflight: dict[str, _Flight] = {}

    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl: float,
    ) -> Any:
        """
        Return the cached value for ``key`` or load, store and return it.

        Concurrent misses for the same key share one ``loader`` call. Failed
        loads are not cached. The load is cancelled only when every waiter
        has been cancelled.
        """
        cached = await self._get_from_store(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        flight = self._inflight.get(key)
        if flight is None:
            logger.debug(f"Cache miss: {key}")
            flight = _Flight(asyncio.ensure_future(self._load(key, loader, ttl)))
            self._inflight[key] = flight
            flight.task.add_done_callback(lambda _: self._forget(key, flight))
        else:
            logger.debug(f"Joining in-flight load: {key}")

        flight.waiters += 1
        try:
            return await asyncio.shield(flight.task)
        except asyncio.CancelledError:
            if flight.waiters == 1 and not flight.task.done():
                flight.task.cancel()
            raise
        finally:
            flight.waiters -= 1

    async def clear(self) -> None:
        await self.store.clear()

    async def close(self) -> None:
        await self.store.close()

    def _forget(self, key: str, flight: _Flight) -> None:
        if self._inflight.get(key) is flight:
            del self._inflight[key]
        # Retrieve the outcome so an unawaited failure is not reported as lost.
        if not flight.task.cancelled():
            flight.task.exception()

    async def _load(self, key: str, loader: Callable[[], Awaitable[Any]], ttl: float) -> Any:
        value = await loader()
        await self._save_to_store(key, value, ttl)
        return value

    async def _get_from_store(self, key: str) -> Any | None:
        try:
            return await self.store.get(key)
        except Exception as e:
            logger.warning(f"Failed to get from cache: {e}")
            return None

    async def _save_to_store(self, key: str, value: Any, ttl: float) -> None:
        try:
            await self.store.set(key, value, ttl)
        except Exception as e:
            logger.warning(f"Failed to save to cache: {e}")
