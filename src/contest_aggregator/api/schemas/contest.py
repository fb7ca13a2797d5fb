"""Pydantic schemas for contest API endpoints."""

from pydantic import BaseModel


class ContestSummaryResponse(BaseModel):
    """Problem set overview of one contest."""

    contest_id: int
    contest_name: str
    total_problems: int
    problem_indexes: list[str]

    class Config:
        from_attributes = True


class ContestListResponse(BaseModel):
    """Contests matching a category, plus warnings for contests left out."""

    contests: list[ContestSummaryResponse]
    warnings: list[str]

    class Config:
        from_attributes = True
