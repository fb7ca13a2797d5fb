from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SampleTest:
    input: str
    output: str


@dataclass(frozen=True)
class Problem:
    """Normalized problem statement.

    HTML fields hold fragments from the problem page. Optional sections are
    ``None`` when the page has no such block and ``""`` when the block exists
    but is empty.
    """

    contest_id: int
    index: str
    title: str
    statement: str
    input_spec: str | None = None
    output_spec: str | None = None
    examples: str | None = None
    note: str | None = None
    time_limit: str | None = None
    memory_limit: str | None = None
    sample_tests: tuple[SampleTest, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    rating: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "contest_id": self.contest_id,
            "index": self.index,
            "title": self.title,
            "statement": self.statement,
            "input_spec": self.input_spec,
            "output_spec": self.output_spec,
            "examples": self.examples,
            "note": self.note,
            "time_limit": self.time_limit,
            "memory_limit": self.memory_limit,
            "sample_tests": [{"input": t.input, "output": t.output} for t in self.sample_tests],
            "tags": list(self.tags),
            "rating": self.rating,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Problem:
        return cls(
            contest_id=data["contest_id"],
            index=data["index"],
            title=data["title"],
            statement=data["statement"],
            input_spec=data.get("input_spec"),
            output_spec=data.get("output_spec"),
            examples=data.get("examples"),
            note=data.get("note"),
            time_limit=data.get("time_limit"),
            memory_limit=data.get("memory_limit"),
            sample_tests=tuple(SampleTest(**t) for t in data.get("sample_tests", [])),
            tags=tuple(data.get("tags", [])),
            rating=data.get("rating"),
        )
