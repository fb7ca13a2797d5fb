"""Client for the Codeforces public API and problem pages."""

import json
from typing import Any

from loguru import logger

from contest_aggregator.domain.exceptions import (
    MalformedUpstreamError,
    UpstreamError,
    UpstreamNotFoundError,
)
from contest_aggregator.domain.models import (
    Contest,
    ProblemHeader,
    parse_contest_id,
    parse_problem_index,
)
from contest_aggregator.infrastructure.circuit_breaker import CircuitBreaker
from contest_aggregator.infrastructure.interfaces import HTTPClientProtocol
from contest_aggregator.infrastructure.retry import RetryPolicy

DEFAULT_API_BASE = "https://codeforces.com/api"
DEFAULT_WEB_BASE = "https://codeforces.com"


def _is_not_found_comment(comment: str) -> bool:
    return "not found" in comment.lower()


class CodeforcesApiClient:
    """Issues the upstream calls: contest list, standings header, problem page."""

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        *,
        api_base: str = DEFAULT_API_BASE,
        web_base: str = DEFAULT_WEB_BASE,
        retry_policy: RetryPolicy | None = None,
        circuit_breaker: CircuitBreaker | None = None,
    ):
        self.http_client = http_client
        self.api_base = api_base.rstrip("/")
        self.web_base = web_base.rstrip("/")
        self.retry_policy = retry_policy or RetryPolicy()
        self.circuit_breaker = circuit_breaker or CircuitBreaker()

    async def fetch_contest_list(self) -> list[Contest]:
        """Fetch all non-gym contests in upstream order (most recent first)."""
        result = await self._call_api("contest.list", {"gym": "false"})
        if not isinstance(result, list):
            raise MalformedUpstreamError("contest.list result is not a list")

        contests = [Contest.from_api(entry) for entry in result]
        logger.debug(f"Fetched {len(contests)} contests")
        return contests

    async def fetch_standings_header(self, contest_id: int) -> list[ProblemHeader]:
        """Fetch the problem list of a contest using a one-row standings request."""
        contest_id = parse_contest_id(contest_id)
        result = await self._call_api(
            "contest.standings",
            {"contestId": contest_id, "from": 1, "count": 1},
        )

        problems = result.get("problems") if isinstance(result, dict) else None
        if not isinstance(problems, list):
            raise MalformedUpstreamError(f"Standings for contest {contest_id} have no problem list")

        headers = []
        for problem in problems:
            index = problem.get("index") if isinstance(problem, dict) else None
            if not isinstance(index, str) or not index:
                raise MalformedUpstreamError(
                    f"Standings problem without index in contest {contest_id}: {problem!r}"
                )
            headers.append(ProblemHeader(index=index, name=problem.get("name")))

        logger.debug(f"Contest {contest_id} has {len(headers)} problems")
        return headers

    async def fetch_problem_detail(self, contest_id: int, index: str) -> str:
        """Fetch the HTML of a problem page, failing fast while the circuit is open."""
        contest_id = parse_contest_id(contest_id)
        index = parse_problem_index(index)
        path = f"/contest/{contest_id}/problem/{index}"
        url = f"{self.web_base}{path}"

        async def attempt() -> str:
            response = await self.http_client.get(url, params={"locale": "en"})
            if response.status == 404:
                raise UpstreamNotFoundError(404, f"Problem {contest_id}/{index} not found")
            if not response.ok:
                raise UpstreamError(response.status, f"GET {url} returned {response.status}")
            # Unknown problems redirect to the contest page instead of failing.
            if path not in response.url:
                raise UpstreamNotFoundError(
                    response.status, f"Problem {contest_id}/{index} not found"
                )
            return response.text

        html = await self.circuit_breaker.call(
            lambda: self.retry_policy.run(attempt, description=f"GET {path}")
        )
        logger.debug(f"Fetched problem page {contest_id}/{index} ({len(html)} bytes)")
        return html

    async def _call_api(self, method: str, params: dict[str, Any]) -> Any:
        url = f"{self.api_base}/{method}"

        async def attempt() -> Any:
            response = await self.http_client.get(url, params=params)
            return self._parse_envelope(method, response.status, response.text)

        return await self.retry_policy.run(attempt, description=method)

    @staticmethod
    def _parse_envelope(method: str, status: int, text: str) -> Any:
        """Unwrap ``{"status": "OK", "result": ...}`` or raise the matching error."""
        try:
            payload = json.loads(text)
        except ValueError:
            payload = None

        comment = ""
        if isinstance(payload, dict):
            comment = str(payload.get("comment") or "")

        if not 200 <= status < 300:
            message = comment or f"{method} returned {status}"
            if status == 404 or _is_not_found_comment(comment):
                raise UpstreamNotFoundError(status, message)
            raise UpstreamError(status, message)

        if not isinstance(payload, dict):
            raise UpstreamError(status, f"{method} returned malformed JSON")

        if payload.get("status") != "OK":
            message = comment or f"{method} returned status {payload.get('status')!r}"
            if _is_not_found_comment(comment):
                raise UpstreamNotFoundError(status, message)
            raise UpstreamError(status, message)

        if "result" not in payload:
            raise MalformedUpstreamError(f"{method} response has no result")

        return payload["result"]
