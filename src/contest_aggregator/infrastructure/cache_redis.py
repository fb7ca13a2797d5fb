"""Redis-backed cache store."""

import json
from typing import Any

from loguru import logger
from redis import asyncio as aioredis

DEFAULT_PREFIX = "contest-aggregator:"


class AsyncRedisCache:
    """Cache store keeping JSON values in Redis with per-key expiry."""

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        prefix: str = DEFAULT_PREFIX,
        client: aioredis.Redis | None = None,
    ):
        self.url = url
        self.prefix = prefix
        self.client = client

    async def connect(self) -> None:
        """Open the connection and check that the server answers."""
        if self.client is None:
            self.client = aioredis.from_url(self.url, decode_responses=True)
        await self.client.ping()
        logger.info(f"Connected to Redis at {self.url}")

    async def get(self, key: str) -> Any | None:
        raw = await self._require_client().get(self.prefix + key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: float) -> None:
        if ttl <= 0:
            return
        await self._require_client().set(
            self.prefix + key,
            json.dumps(value),
            px=int(ttl * 1000),
        )

    async def clear(self) -> None:
        """Delete every key under this cache's prefix."""
        client = self._require_client()
        deleted = 0
        async for key in client.scan_iter(match=f"{self.prefix}*"):
            await client.delete(key)
            deleted += 1
        logger.info(f"Cleared {deleted} Redis cache entries")

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.debug("Redis connection closed")

    def _require_client(self) -> aioredis.Redis:
        if self.client is None:
            raise RuntimeError("Redis cache is not connected")
        return self.client
