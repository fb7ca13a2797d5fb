"""Unit tests for the circuit breaker state machine with a fake clock."""

import pytest
from unittest.mock import AsyncMock

from contest_aggregator.domain.exceptions import (
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamTimeoutError,
    ValidationError,
)
from contest_aggregator.infrastructure.circuit_breaker import (
    CircuitBreaker,
    CircuitOpenError,
    CircuitState,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def breaker(clock):
    return CircuitBreaker(threshold=5, reset_timeout=300, clock=clock)


async def fail(breaker: CircuitBreaker, times: int, error: Exception | None = None):
    call = AsyncMock(side_effect=error or UpstreamError(503, "unavailable"))
    for _ in range(times):
        with pytest.raises(type(error) if error else UpstreamError):
            await breaker.call(call)


@pytest.mark.asyncio
async def test_opens_after_threshold_failures(breaker):
    """Five consecutive upstream failures open the circuit."""
    await fail(breaker, 4)
    assert breaker.state is CircuitState.CLOSED

    await fail(breaker, 1)

    assert breaker.state is CircuitState.OPEN
    assert breaker.failure_count == 5


@pytest.mark.asyncio
async def test_open_circuit_rejects_without_calling(breaker):
    """While open, calls fail fast with an UpstreamError and never run."""
    await fail(breaker, 5)
    call = AsyncMock(return_value="page")

    with pytest.raises(CircuitOpenError) as exc_info:
        await breaker.call(call)

    assert isinstance(exc_info.value, UpstreamError)
    assert exc_info.value.kind == "UpstreamError"
    call.assert_not_awaited()


@pytest.mark.asyncio
async def test_timeouts_count_as_failures(breaker):
    """Upstream timeouts trip the circuit like server errors."""
    await fail(breaker, 5, UpstreamTimeoutError())

    assert breaker.state is CircuitState.OPEN


@pytest.mark.asyncio
async def test_not_found_resets_failures(breaker):
    """A not-found answer means upstream is healthy."""
    await fail(breaker, 3)

    await fail(breaker, 1, UpstreamNotFoundError(404, "missing"))

    assert breaker.state is CircuitState.CLOSED
    assert breaker.failure_count == 0


@pytest.mark.asyncio
async def test_other_errors_are_not_counted(breaker):
    """Errors that do not come from upstream leave the counter alone."""
    call = AsyncMock(side_effect=ValidationError("bad index"))

    with pytest.raises(ValidationError):
        await breaker.call(call)

    assert breaker.failure_count == 0


@pytest.mark.asyncio
async def test_half_open_after_reset_timeout(breaker, clock):
    """Once the reset timeout passes, one trial call is let through."""
    await fail(breaker, 5)
    clock.now += 299
    assert not breaker.can_execute()

    clock.now += 1

    assert breaker.can_execute()
    assert breaker.state is CircuitState.HALF_OPEN


@pytest.mark.asyncio
async def test_half_open_success_closes(breaker, clock):
    """A successful trial call closes the circuit and clears the count."""
    await fail(breaker, 5)
    clock.now += 300
    call = AsyncMock(return_value="page")

    assert await breaker.call(call) == "page"

    assert breaker.state is CircuitState.CLOSED
    assert breaker.failure_count == 0
    assert breaker.status() == {"state": "CLOSED", "failure_count": 0, "time_until_reset": 0.0}


@pytest.mark.asyncio
async def test_half_open_failure_reopens(breaker, clock):
    """A failed trial call opens the circuit for another full timeout."""
    await fail(breaker, 5)
    clock.now += 300

    await fail(breaker, 1)

    assert breaker.state is CircuitState.OPEN
    assert breaker.time_until_reset() == 300


@pytest.mark.asyncio
async def test_status_reports_time_until_reset(breaker, clock):
    """Status exposes the state, failure count and remaining open time."""
    await fail(breaker, 5)
    clock.now += 120

    assert breaker.status() == {"state": "OPEN", "failure_count": 5, "time_until_reset": 180.0}
