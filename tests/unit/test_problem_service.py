"""Unit tests for the problem service."""

import asyncio

import pytest
from unittest.mock import AsyncMock

from contest_aggregator.domain.exceptions import (
    MalformedUpstreamError,
    UpstreamNotFoundError,
    ValidationError,
)
from contest_aggregator.infrastructure.cache import MemoryCacheStore, ReadThroughCache
from contest_aggregator.infrastructure.parsers import ProblemPageParser
from contest_aggregator.services.problem import ProblemService


@pytest.fixture
def api_client(problem_page_html):
    client = AsyncMock()
    client.fetch_problem_detail.return_value = problem_page_html
    return client


def make_service(api_client, cache=None) -> ProblemService:
    return ProblemService(api_client=api_client, normalizer=ProblemPageParser(), cache=cache)


@pytest.mark.asyncio
async def test_fetches_and_normalizes(api_client):
    service = make_service(api_client)

    problem = await service.get_problem("1900", "A")

    assert problem.contest_id == 1900
    assert problem.title == "A. Cover in Water"
    api_client.fetch_problem_detail.assert_awaited_once_with(1900, "A")


@pytest.mark.asyncio
@pytest.mark.parametrize("contest_id, index", [("123", "Z9"), ("abc", "A"), (0, "A"), (1, "a")])
async def test_invalid_identifiers_make_no_call(api_client, contest_id, index):
    service = make_service(api_client)

    with pytest.raises(ValidationError):
        await service.get_problem(contest_id, index)

    api_client.fetch_problem_detail.assert_not_awaited()


@pytest.mark.asyncio
async def test_not_found_propagates(api_client):
    api_client.fetch_problem_detail.side_effect = UpstreamNotFoundError(404, "not found")
    service = make_service(api_client)

    with pytest.raises(UpstreamNotFoundError):
        await service.get_problem(1900, "Z")


@pytest.mark.asyncio
async def test_malformed_page_propagates(api_client):
    api_client.fetch_problem_detail.return_value = "<html><body>Contest</body></html>"
    service = make_service(api_client)

    with pytest.raises(MalformedUpstreamError):
        await service.get_problem(1900, "A")


@pytest.mark.asyncio
async def test_cached_problem_equals_fresh_one(api_client):
    service = make_service(api_client, ReadThroughCache(MemoryCacheStore()))

    fresh = await service.get_problem(1900, "A")
    cached = await service.get_problem(1900, "A")

    assert fresh == cached
    api_client.fetch_problem_detail.assert_awaited_once()


@pytest.mark.asyncio
async def test_concurrent_requests_fetch_once(api_client, problem_page_html):
    async def slow_fetch(contest_id, index):
        await asyncio.sleep(0.01)
        return problem_page_html

    api_client.fetch_problem_detail.side_effect = slow_fetch
    service = make_service(api_client, ReadThroughCache(MemoryCacheStore()))

    first, second = await asyncio.gather(
        service.get_problem(1900, "A"),
        service.get_problem("1900", "A"),
    )

    assert first == second
    assert api_client.fetch_problem_detail.await_count == 1
