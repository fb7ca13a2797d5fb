"""API routes for problem statements."""

from typing import Annotated

from litestar import Controller, get
from litestar.datastructures import State
from litestar.params import Dependency
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from contest_aggregator.api.dependencies import with_deadline
from contest_aggregator.api.schemas.problem import ProblemResponse
from contest_aggregator.services import ProblemService


class ProblemController(Controller):
    """Controller for problem-related endpoints."""

    path = "/contest"

    @get("/{contest_id:str}/problem/{index:str}", status_code=HTTP_200_OK)
    async def get_problem(
        self,
        contest_id: str,
        index: str,
        problem_service: Annotated[ProblemService, Dependency(skip_validation=True)],
        state: State,
    ) -> ProblemResponse:
        """
        Get a normalized problem statement.

        Path parameters:
        - contest_id: Codeforces contest ID (e.g., "1900")
        - index: problem index (e.g., "A", "B1")
        """
        logger.debug(f"API request for problem: {contest_id}/{index}")

        problem = await with_deadline(
            problem_service.get_problem(contest_id, index),
            state.settings.request_deadline,
        )
        return ProblemResponse.model_validate(problem)
