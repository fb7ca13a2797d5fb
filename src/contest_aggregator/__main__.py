"""Run the aggregator API: ``python -m contest_aggregator``."""

import uvicorn

from contest_aggregator.api import create_app
from contest_aggregator.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
