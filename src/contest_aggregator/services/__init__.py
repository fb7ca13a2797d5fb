from dataclasses import dataclass

from loguru import logger

from contest_aggregator.config import Settings
from contest_aggregator.infrastructure.cache import MemoryCacheStore, ReadThroughCache
from contest_aggregator.infrastructure.circuit_breaker import CircuitBreaker
from contest_aggregator.infrastructure.http_client import AsyncHTTPClient
from contest_aggregator.services.contest import ContestService
from contest_aggregator.services.problem import ProblemService


@dataclass
class Services:
    """Services sharing one HTTP client and one cache."""

    contest: ContestService
    problem: ProblemService
    http_client: AsyncHTTPClient | None = None
    cache: ReadThroughCache | None = None
    circuit_breaker: CircuitBreaker | None = None

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.close()
        if self.cache is not None:
            await self.cache.close()


async def create_cache(settings: Settings) -> ReadThroughCache | None:
    """Build the configured cache; Redis falls back to memory when unreachable."""
    if settings.cache_backend == "none":
        logger.info("Caching disabled")
        return None

    if settings.cache_backend == "redis":
        from contest_aggregator.infrastructure.cache_redis import AsyncRedisCache

        store = AsyncRedisCache(settings.redis_url)
        try:
            await store.connect()
            return ReadThroughCache(store)
        except Exception as e:
            logger.warning(f"Failed to connect to Redis, using in-memory cache: {e}")
            await store.close()

    return ReadThroughCache(MemoryCacheStore(max_entries=settings.cache_max_entries))


async def create_services(settings: Settings) -> Services:
    """Factory function to create services with all dependencies."""
    from contest_aggregator.infrastructure.codeforces_client import CodeforcesApiClient
    from contest_aggregator.infrastructure.parsers import ProblemPageParser
    from contest_aggregator.infrastructure.retry import RetryPolicy

    http_client = AsyncHTTPClient(
        timeout=settings.request_timeout,
        impersonate=settings.impersonate,
    )
    circuit_breaker = CircuitBreaker(
        threshold=settings.circuit_breaker_threshold,
        reset_timeout=settings.circuit_breaker_reset,
    )
    api_client = CodeforcesApiClient(
        http_client,
        api_base=settings.api_base_url,
        web_base=settings.web_base_url,
        retry_policy=RetryPolicy(
            attempts=settings.retry_attempts,
            base_delay=settings.retry_base_delay,
            factor=settings.retry_factor,
            jitter=settings.retry_jitter,
        ),
        circuit_breaker=circuit_breaker,
    )
    cache = await create_cache(settings)

    return Services(
        contest=ContestService(
            api_client=api_client,
            cache=cache,
            max_concurrency=settings.max_concurrency,
            max_limit=settings.max_contest_limit,
            contest_list_ttl=settings.contest_list_cache_ttl,
            standings_ttl=settings.problem_cache_ttl,
        ),
        problem=ProblemService(
            api_client=api_client,
            normalizer=ProblemPageParser(),
            cache=cache,
            problem_ttl=settings.problem_cache_ttl,
        ),
        http_client=http_client,
        cache=cache,
        circuit_breaker=circuit_breaker,
    )


__all__ = ["ContestService", "ProblemService", "Services", "create_cache", "create_services"]
