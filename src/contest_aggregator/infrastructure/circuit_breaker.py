"""Circuit breaker guarding problem page fetches."""

import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

from loguru import logger

from contest_aggregator.domain.exceptions import (
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamTimeoutError,
)

T = TypeVar("T")


class CircuitState(str, Enum):
    CLOSED = "CLOSED"
    OPEN = "OPEN"
    HALF_OPEN = "HALF_OPEN"


class CircuitOpenError(UpstreamError):
    """Raised without calling upstream while the circuit is open."""

    def __init__(self, retry_in: float):
        super().__init__(None, f"circuit open after repeated failures, retry in {retry_in:.0f}s")


class CircuitBreaker:
    """
    Opens after ``threshold`` consecutive failures and rejects calls until
    ``reset_timeout`` seconds have passed. The next call is then let through
    in HALF_OPEN state: success closes the circuit, failure opens it again.

    Not-found answers are valid upstream replies and do not count as failures.
    """

    def __init__(
        self,
        threshold: int = 5,
        reset_timeout: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.threshold = threshold
        self.reset_timeout = reset_timeout
        self.clock = clock
        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.opened_at: float | None = None

    def time_until_reset(self) -> float:
        if self.state is not CircuitState.OPEN or self.opened_at is None:
            return 0.0
        return max(0.0, self.reset_timeout - (self.clock() - self.opened_at))

    def can_execute(self) -> bool:
        if self.state is CircuitState.OPEN:
            if self.time_until_reset() > 0:
                return False
            self.state = CircuitState.HALF_OPEN
            logger.info("Circuit breaker HALF_OPEN, letting a trial request through")
        return True

    def on_success(self) -> None:
        if self.state is not CircuitState.CLOSED:
            logger.info("Circuit breaker CLOSED")
        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.opened_at = None

    def on_failure(self) -> None:
        self.failure_count += 1
        if self.state is CircuitState.HALF_OPEN or self.failure_count >= self.threshold:
            self.state = CircuitState.OPEN
            self.opened_at = self.clock()
            logger.warning(f"Circuit breaker OPEN after {self.failure_count} failure(s)")

    async def call(self, call: Callable[[], Awaitable[T]]) -> T:
        if not self.can_execute():
            raise CircuitOpenError(self.time_until_reset())

        try:
            result = await call()
        except UpstreamNotFoundError:
            self.on_success()
            raise
        except (UpstreamError, UpstreamTimeoutError):
            self.on_failure()
            raise

        self.on_success()
        return result

    def status(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "failure_count": self.failure_count,
            "time_until_reset": round(self.time_until_reset(), 1),
        }
