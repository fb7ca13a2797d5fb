from .cache import MemoryCacheStore, ReadThroughCache
from .circuit_breaker import CircuitBreaker, CircuitOpenError, CircuitState
from .codeforces_client import CodeforcesApiClient
from .http_client import AsyncHTTPClient, HTTPResponse
from .retry import RetryPolicy

__all__ = [
    "AsyncHTTPClient",
    "CircuitBreaker",
    "CircuitOpenError",
    "CircuitState",
    "CodeforcesApiClient",
    "HTTPResponse",
    "MemoryCacheStore",
    "ReadThroughCache",
    "RetryPolicy",
]
