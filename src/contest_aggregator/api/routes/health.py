from typing import Any

from litestar import get
from litestar.datastructures import State

from contest_aggregator.infrastructure.circuit_breaker import CircuitState


@get("/health", sync_to_thread=False)
def health(state: State) -> dict[str, Any]:
    """Liveness plus the state of the problem-fetch circuit breaker."""
    breaker = getattr(state.services, "circuit_breaker", None)
    if breaker is None:
        return {"status": "ok"}

    status = "degraded" if breaker.state is CircuitState.OPEN else "ok"
    return {"status": status, "circuit_breaker": breaker.status()}
