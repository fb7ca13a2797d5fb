"""Exponential backoff for idempotent upstream calls."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from loguru import logger

from contest_aggregator.domain.exceptions import UpstreamError, UpstreamTimeoutError

T = TypeVar("T")


def is_retryable(error: Exception) -> bool:
    """Only timeouts and 5xx responses are worth another attempt."""
    if isinstance(error, UpstreamTimeoutError):
        return True
    if isinstance(error, UpstreamError):
        return error.retryable
    return False


@dataclass(frozen=True)
class RetryPolicy:
    """Retry settings: ``attempts`` retries after the first call."""

    attempts: int = 2
    base_delay: float = 0.2
    factor: float = 2.0
    jitter: float = 0.2

    def delay(self, retry: int) -> float:
        """Backoff before retry number ``retry`` (0-based), jitter included."""
        delay = self.base_delay * (self.factor**retry)
        if self.jitter:
            delay *= random.uniform(1 - self.jitter, 1 + self.jitter)
        return delay

    async def run(self, call: Callable[[], Awaitable[T]], description: str = "request") -> T:
        """Await ``call()``, retrying retryable failures with backoff."""
        retry = 0
        while True:
            try:
                return await call()
            except (UpstreamError, UpstreamTimeoutError) as e:
                if retry >= self.attempts or not is_retryable(e):
                    raise
                delay = self.delay(retry)
                retry += 1
                logger.warning(
                    f"{description} failed ({e}), retry {retry}/{self.attempts} in {delay:.2f}s"
                )
                await asyncio.sleep(delay)
