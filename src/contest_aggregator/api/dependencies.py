import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from litestar.datastructures import State
from loguru import logger

from contest_aggregator.domain.exceptions import UpstreamTimeoutError
from contest_aggregator.services import ContestService, ProblemService

T = TypeVar("T")


def provide_contest_service(state: State) -> ContestService:
    return state.services.contest


def provide_problem_service(state: State) -> ProblemService:
    return state.services.problem


async def with_deadline(awaitable: Awaitable[T], seconds: float) -> T:
    """Await ``awaitable``, cancelling it when the request deadline passes."""
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        logger.warning(f"Request deadline of {seconds}s exceeded, upstream calls cancelled")
        raise UpstreamTimeoutError(f"request deadline of {seconds}s exceeded") from e
