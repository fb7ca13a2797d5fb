"""Service for listing contests by category."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from contest_aggregator.domain.exceptions import AggregatorError, ValidationError
from contest_aggregator.domain.models import (
    Contest,
    ContestListing,
    ContestPhase,
    ContestSummary,
    ProblemHeader,
)
from contest_aggregator.domain.predicates import CategoryPredicate
from contest_aggregator.infrastructure.cache import ReadThroughCache
from contest_aggregator.infrastructure.interfaces import ContestAPIClientProtocol

CONTEST_LIST_CACHE_KEY = "contest.list"


class ContestService:
    """Selects finished contests of a category and summarizes their problem sets."""

    def __init__(
        self,
        *,
        api_client: ContestAPIClientProtocol,
        cache: ReadThroughCache | None = None,
        max_concurrency: int = 4,
        max_limit: int = 50,
        contest_list_ttl: float = 60.0,
        standings_ttl: float = 3600.0,
    ):
        """Initialize service with dependencies."""
        self.api_client = api_client
        self.cache = cache
        self.max_concurrency = max_concurrency
        self.max_limit = max_limit
        self.contest_list_ttl = contest_list_ttl
        self.standings_ttl = standings_ttl

    async def list_contests_by_category(
        self,
        predicate: CategoryPredicate,
        limit: int,
    ) -> ContestListing:
        """
        List the most recent finished contests whose name satisfies ``predicate``.

        Args:
            predicate: Test applied to each contest name
            limit: Maximum number of contests to return

        Returns:
            ContestListing in upstream order; contests whose problem set could
            not be fetched are left out and described in ``warnings``

        Raises:
            ValidationError: If limit is not a positive integer within bounds
            UpstreamError, UpstreamTimeoutError, MalformedUpstreamError:
                If the contest list itself cannot be fetched
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ValidationError(f"limit must be a positive integer, got {limit!r}")
        if limit > self.max_limit:
            raise ValidationError(f"limit must not exceed {self.max_limit}, got {limit}")

        logger.debug(f"Listing contests: predicate={predicate!r}, limit={limit}")

        contests = await self._get_contest_list()
        selected = [
            contest
            for contest in contests
            if contest.phase is ContestPhase.FINISHED and predicate(contest.name)
        ][:limit]

        semaphore = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(
            *(self._summarize(contest, semaphore) for contest in selected)
        )

        listing = ContestListing()
        for contest, outcome in zip(selected, outcomes):
            if isinstance(outcome, AggregatorError):
                listing.warnings.append(f"contest {contest.id}: {outcome}")
            else:
                listing.contests.append(outcome)

        if listing.warnings:
            logger.warning(
                f"Omitted {len(listing.warnings)} contest(s) from listing: {listing.warnings}"
            )
        logger.info(f"Listed {len(listing.contests)} contest(s) for {predicate!r}")
        return listing

    async def clear_cache(self) -> None:
        if self.cache is not None:
            logger.info("Clearing cache")
            await self.cache.clear()
        else:
            logger.warning("Cache is not enabled")

    async def _summarize(
        self,
        contest: Contest,
        semaphore: asyncio.Semaphore,
    ) -> ContestSummary | AggregatorError:
        """Build one summary; upstream failures are returned, not raised."""
        try:
            async with semaphore:
                headers = await self._get_standings_header(contest.id)
        except AggregatorError as e:
            logger.warning(f"Failed to fetch problems for contest {contest.id}: {e}")
            return e

        return ContestSummary(
            contest_id=contest.id,
            contest_name=contest.name,
            problem_indexes=tuple(header.index for header in headers),
        )

    async def _get_contest_list(self) -> list[Contest]:
        async def load() -> list[dict[str, Any]]:
            contests = await self.api_client.fetch_contest_list()
            return [contest.to_dict() for contest in contests]

        entries = await self._cached(CONTEST_LIST_CACHE_KEY, load, self.contest_list_ttl)
        return [Contest.from_api(entry) for entry in entries]

    async def _get_standings_header(self, contest_id: int) -> list[ProblemHeader]:
        async def load() -> list[dict[str, Any]]:
            headers = await self.api_client.fetch_standings_header(contest_id)
            return [{"index": header.index, "name": header.name} for header in headers]

        entries = await self._cached(f"contest.standings:{contest_id}", load, self.standings_ttl)
        return [ProblemHeader(**entry) for entry in entries]

    async def _cached(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl: float,
    ) -> Any:
        if self.cache is None:
            return await loader()
        return await self.cache.get_or_load(key, loader, ttl)
