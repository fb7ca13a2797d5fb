"""Application settings loaded from the environment (and ``.env``)."""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TypeVar

from dotenv import load_dotenv

from contest_aggregator.domain.exceptions import ConfigError

T = TypeVar("T")

CACHE_BACKENDS = ("memory", "redis", "none")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration with the documented defaults."""

    api_base_url: str = "https://codeforces.com/api"
    web_base_url: str = "https://codeforces.com"
    request_timeout: float = 10.0
    impersonate: str = "chrome"

    retry_attempts: int = 2
    retry_base_delay: float = 0.2
    retry_factor: float = 2.0
    retry_jitter: float = 0.2

    max_concurrency: int = 4
    max_contest_limit: int = 50
    request_deadline: float = 15.0

    circuit_breaker_threshold: int = 5
    circuit_breaker_reset: float = 300.0

    contest_list_cache_ttl: float = 60.0
    problem_cache_ttl: float = 3600.0
    cache_max_entries: int = 1024
    cache_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Read settings from ``env`` (defaults to ``os.environ`` after loading ``.env``)."""
        if env is None:
            load_dotenv()
            env = os.environ

        defaults = cls()

        def read(name: str, default: T, convert: Callable[[str], T]) -> T:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                return convert(raw)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {name}: {raw!r}") from e

        settings = cls(
            api_base_url=read("CF_API_BASE_URL", defaults.api_base_url, str).rstrip("/"),
            web_base_url=read("CF_WEB_BASE_URL", defaults.web_base_url, str).rstrip("/"),
            request_timeout=read("CF_REQUEST_TIMEOUT", defaults.request_timeout, float),
            impersonate=read("CF_IMPERSONATE", defaults.impersonate, str),
            retry_attempts=read("CF_RETRY_ATTEMPTS", defaults.retry_attempts, int),
            retry_base_delay=read("CF_RETRY_BASE_DELAY", defaults.retry_base_delay, float),
            retry_factor=read("CF_RETRY_FACTOR", defaults.retry_factor, float),
            retry_jitter=read("CF_RETRY_JITTER", defaults.retry_jitter, float),
            max_concurrency=read("MAX_CONCURRENCY", defaults.max_concurrency, int),
            max_contest_limit=read("MAX_CONTEST_LIMIT", defaults.max_contest_limit, int),
            request_deadline=read("REQUEST_DEADLINE", defaults.request_deadline, float),
            circuit_breaker_threshold=read(
                "CIRCUIT_BREAKER_THRESHOLD", defaults.circuit_breaker_threshold, int
            ),
            circuit_breaker_reset=read(
                "CIRCUIT_BREAKER_RESET", defaults.circuit_breaker_reset, float
            ),
            contest_list_cache_ttl=read(
                "CONTEST_LIST_CACHE_TTL", defaults.contest_list_cache_ttl, float
            ),
            problem_cache_ttl=read("PROBLEM_CACHE_TTL", defaults.problem_cache_ttl, float),
            cache_max_entries=read("CACHE_MAX_ENTRIES", defaults.cache_max_entries, int),
            cache_backend=read("CACHE_BACKEND", defaults.cache_backend, str).lower(),
            redis_url=read("REDIS_URL", defaults.redis_url, str),
            log_level=read("LOG_LEVEL", defaults.log_level, str).upper(),
            host=read("HOST", defaults.host, str),
            port=read("PORT", defaults.port, int),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Reject values the services cannot work with."""
        positive = {
            "CF_REQUEST_TIMEOUT": self.request_timeout,
            "MAX_CONCURRENCY": self.max_concurrency,
            "MAX_CONTEST_LIMIT": self.max_contest_limit,
            "REQUEST_DEADLINE": self.request_deadline,
            "CACHE_MAX_ENTRIES": self.cache_max_entries,
            "CIRCUIT_BREAKER_THRESHOLD": self.circuit_breaker_threshold,
            "CIRCUIT_BREAKER_RESET": self.circuit_breaker_reset,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")

        non_negative = {
            "CF_RETRY_ATTEMPTS": self.retry_attempts,
            "CF_RETRY_BASE_DELAY": self.retry_base_delay,
            "CONTEST_LIST_CACHE_TTL": self.contest_list_cache_ttl,
            "PROBLEM_CACHE_TTL": self.problem_cache_ttl,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ConfigError(f"{name} must not be negative, got {value}")

        if not 0 <= self.retry_jitter < 1:
            raise ConfigError(f"CF_RETRY_JITTER must be in [0, 1), got {self.retry_jitter}")

        if self.cache_backend not in CACHE_BACKENDS:
            raise ConfigError(
                f"CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)}, "
                f"got {self.cache_backend!r}"
            )
