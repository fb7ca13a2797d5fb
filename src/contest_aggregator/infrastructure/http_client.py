"""Async HTTP client built on curl_cffi."""

from dataclasses import dataclass
from typing import Any

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import RequestException, Timeout
from loguru import logger

from contest_aggregator.domain.exceptions import UpstreamError, UpstreamTimeoutError

DEFAULT_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass(frozen=True)
class HTTPResponse:
    """Transport-neutral view of a response."""

    status: int
    text: str
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class AsyncHTTPClient:
    """GET-only HTTP client with browser impersonation and a per-request timeout."""

    def __init__(
        self,
        timeout: float = 10.0,
        impersonate: str = "chrome",
        headers: dict[str, str] | None = None,
        session: Any = None,
    ):
        """
        Initialize client.

        Args:
            timeout: Per-request timeout in seconds
            impersonate: curl_cffi browser fingerprint
            headers: Extra headers sent with every request
            session: Pre-built session (created lazily when omitted)
        """
        self.timeout = timeout
        self.impersonate = impersonate
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._session = session

    def _get_session(self) -> Any:
        if self._session is None:
            self._session = AsyncSession(impersonate=self.impersonate, headers=self.headers)
        return self._session

    async def get(self, url: str, params: dict[str, Any] | None = None) -> HTTPResponse:
        """Issue a GET request. Transport failures map to the upstream error types."""
        logger.debug(f"GET {url} params={params}")
        session = self._get_session()

        try:
            response = await session.get(url, params=params, timeout=self.timeout)
        except Timeout as e:
            logger.warning(f"Timeout after {self.timeout}s: {url}")
            raise UpstreamTimeoutError() from e
        except RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise UpstreamError(None, f"request failed: {e}") from e

        return HTTPResponse(
            status=response.status_code,
            text=response.text,
            url=str(response.url),
        )

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
