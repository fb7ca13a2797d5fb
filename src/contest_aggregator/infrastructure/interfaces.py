"""Protocol interfaces for infrastructure collaborators."""

from typing import Any, Protocol

from contest_aggregator.domain.models import Contest, Problem, ProblemHeader
from contest_aggregator.infrastructure.http_client import HTTPResponse


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get(self, url: str, params: dict[str, Any] | None = None) -> HTTPResponse:
        """Issue a GET request."""
        ...


class ContestAPIClientProtocol(Protocol):
    """Protocol for the upstream contest API client."""

    async def fetch_contest_list(self) -> list[Contest]:
        """All contests, most recent first."""
        ...

    async def fetch_standings_header(self, contest_id: int) -> list[ProblemHeader]:
        """Problem set of a contest."""
        ...

    async def fetch_problem_detail(self, contest_id: int, index: str) -> str:
        """Raw problem page HTML."""
        ...


class ProblemNormalizerProtocol(Protocol):
    """Protocol for turning raw problem payloads into ``Problem``."""

    def normalize(self, contest_id: int, index: str, raw: str) -> Problem:
        ...


class CacheStoreProtocol(Protocol):
    """Key/value store with per-entry TTL holding JSON-compatible values."""

    async def get(self, key: str) -> Any | None:
        ...

    async def set(self, key: str, value: Any, ttl: float) -> None:
        ...

    async def clear(self) -> None:
        ...

    async def close(self) -> None:
        ...
