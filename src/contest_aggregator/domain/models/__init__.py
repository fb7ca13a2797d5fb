"""Domain models package."""

from .contest import Contest, ContestListing, ContestPhase, ContestSummary, ProblemHeader
from .identifiers import ProblemIdentifier, parse_contest_id, parse_problem_index
from .problem import Problem, SampleTest

__all__ = [
    "Contest",
    "ContestListing",
    "ContestPhase",
    "ContestSummary",
    "Problem",
    "ProblemHeader",
    "ProblemIdentifier",
    "SampleTest",
    "parse_contest_id",
    "parse_problem_index",
]
