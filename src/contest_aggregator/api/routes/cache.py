from typing import Annotated

from litestar import Controller, delete
from litestar.params import Dependency
from litestar.status_codes import HTTP_204_NO_CONTENT

from contest_aggregator.services import ContestService


class CacheController(Controller):
    path = "/cache"

    @delete("/", status_code=HTTP_204_NO_CONTENT)
    async def clear_cache(
        self,
        contest_service: Annotated[ContestService, Dependency(skip_validation=True)],
    ) -> None:
        """Drop every cached contest list, standings header and problem."""
        await contest_service.clear_cache()
