"""API routes for contest listings."""

from typing import Annotated

from litestar import Controller, get
from litestar.datastructures import State
from litestar.params import Dependency
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from contest_aggregator.api.dependencies import with_deadline
from contest_aggregator.api.schemas.contest import ContestListResponse, ContestSummaryResponse
from contest_aggregator.domain.predicates import NameContains
from contest_aggregator.services import ContestService

DEFAULT_CATEGORY = "Div. 2"
DEFAULT_LIMIT = 5


class ContestController(Controller):
    """Controller for contest-related endpoints."""

    path = "/contests"

    @get("/", status_code=HTTP_200_OK)
    async def list_contests(
        self,
        contest_service: Annotated[ContestService, Dependency(skip_validation=True)],
        state: State,
        category: str = DEFAULT_CATEGORY,
        limit: int = DEFAULT_LIMIT,
    ) -> ContestListResponse:
        """
        List recent finished contests whose name contains ``category``.

        Query parameters:
        - category: substring of the contest name (e.g., "Div. 2")
        - limit: maximum number of contests to return

        Contests whose problem set could not be fetched are omitted and
        reported in ``warnings``.
        """
        logger.debug(f"API request for contests: category={category!r}, limit={limit}")

        listing = await with_deadline(
            contest_service.list_contests_by_category(NameContains(category), limit),
            state.settings.request_deadline,
        )

        return ContestListResponse(
            contests=[ContestSummaryResponse.model_validate(c) for c in listing.contests],
            warnings=listing.warnings,
        )
