"""Pydantic schemas for problem API endpoints."""

from pydantic import BaseModel


class SampleTestResponse(BaseModel):
    input: str
    output: str

    class Config:
        from_attributes = True


class ProblemResponse(BaseModel):
    """Normalized problem. Absent optional sections are null, empty ones ""."""

    contest_id: int
    index: str
    title: str
    statement: str  # HTML, not sanitized
    input_spec: str | None = None
    output_spec: str | None = None
    examples: str | None = None
    note: str | None = None
    time_limit: str | None = None  # e.g. "2 seconds"
    memory_limit: str | None = None  # e.g. "256 megabytes"
    sample_tests: list[SampleTestResponse] = []
    tags: list[str] = []
    rating: int | None = None  # difficulty, e.g. 800

    class Config:
        from_attributes = True
