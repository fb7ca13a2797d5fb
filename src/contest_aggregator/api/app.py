"""Litestar application factory."""

import sys

from litestar import Litestar
from litestar.datastructures import State
from litestar.di import Provide
from loguru import logger

from contest_aggregator.api.dependencies import (
    provide_contest_service,
    provide_problem_service,
)
from contest_aggregator.api.errors import EXCEPTION_HANDLERS
from contest_aggregator.api.routes import (
    CacheController,
    ContestController,
    ProblemController,
    health,
)
from contest_aggregator.config import Settings
from contest_aggregator.services import Services, create_services


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def create_app(settings: Settings | None = None, services: Services | None = None) -> Litestar:
    """
    Build the application.

    Args:
        settings: Configuration (read from the environment when omitted)
        services: Prebuilt services; when omitted they are created on
            startup and closed on shutdown
    """
    settings = settings or Settings.from_env()

    async def on_startup(app: Litestar) -> None:
        configure_logging(settings.log_level)
        if services is None:
            app.state.services = await create_services(settings)
        else:
            app.state.services = services
        logger.info(f"Contest aggregator started, upstream {settings.api_base_url}")

    async def on_shutdown(app: Litestar) -> None:
        if services is None:
            await app.state.services.close()
        logger.info("Contest aggregator stopped")

    return Litestar(
        route_handlers=[ContestController, ProblemController, CacheController, health],
        dependencies={
            "contest_service": Provide(provide_contest_service, sync_to_thread=False),
            "problem_service": Provide(provide_problem_service, sync_to_thread=False),
        },
        exception_handlers=EXCEPTION_HANDLERS,
        on_startup=[on_startup],
        on_shutdown=[on_shutdown],
        state=State({"settings": settings}),
    )
