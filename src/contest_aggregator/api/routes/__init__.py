from contest_aggregator.api.routes.cache import CacheController
from contest_aggregator.api.routes.contest import ContestController
from contest_aggregator.api.routes.health import health
from contest_aggregator.api.routes.problem import ProblemController

__all__ = ["CacheController", "ContestController", "ProblemController", "health"]
