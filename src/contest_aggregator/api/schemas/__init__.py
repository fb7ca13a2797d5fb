"""Response schemas for the HTTP API."""

from .contest import ContestListResponse, ContestSummaryResponse
from .errors import ErrorResponse
from .problem import ProblemResponse, SampleTestResponse

__all__ = [
    "ContestListResponse",
    "ContestSummaryResponse",
    "ErrorResponse",
    "ProblemResponse",
    "SampleTestResponse",
]
