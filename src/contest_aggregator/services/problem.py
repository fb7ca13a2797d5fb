"""Service for handling problem-related operations."""

from loguru import logger

from contest_aggregator.domain.models import Problem, ProblemIdentifier
from contest_aggregator.infrastructure.cache import ReadThroughCache
from contest_aggregator.infrastructure.interfaces import (
    ContestAPIClientProtocol,
    ProblemNormalizerProtocol,
)


class ProblemService:
    """Fetches and normalizes Codeforces problem statements."""

    def __init__(
        self,
        *,
        api_client: ContestAPIClientProtocol,
        normalizer: ProblemNormalizerProtocol,
        cache: ReadThroughCache | None = None,
        problem_ttl: float = 3600.0,
    ):
        self.api_client = api_client
        self.normalizer = normalizer
        self.cache = cache
        self.problem_ttl = problem_ttl

    async def get_problem(self, contest_id: int | str, index: str) -> Problem:
        """
        Get a normalized problem.

        Raises:
            ValidationError: If contest_id or index is malformed
            UpstreamNotFoundError: If upstream has no such problem
            MalformedUpstreamError: If the page lacks a title or statement
        """
        identifier = ProblemIdentifier.parse(contest_id, index)
        logger.info(f"Getting problem via service: {identifier}")

        async def load() -> dict:
            raw = await self.api_client.fetch_problem_detail(identifier.contest_id, identifier.index)
            problem = self.normalizer.normalize(identifier.contest_id, identifier.index, raw)
            return problem.to_dict()

        if self.cache is None:
            data = await load()
        else:
            data = await self.cache.get_or_load(identifier.cache_key, load, self.problem_ttl)

        return Problem.from_dict(data)
