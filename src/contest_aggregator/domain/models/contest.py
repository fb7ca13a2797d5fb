"""Contest domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from contest_aggregator.domain.exceptions import MalformedUpstreamError


class ContestPhase(str, Enum):
    """Lifecycle stage of a contest as reported by Codeforces."""

    BEFORE = "BEFORE"
    CODING = "CODING"
    PENDING_SYSTEM_TEST = "PENDING_SYSTEM_TEST"
    SYSTEM_TEST = "SYSTEM_TEST"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class Contest:
    id: int
    name: str
    phase: ContestPhase
    start_time_seconds: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Contest:
        """Build a contest from one ``contest.list`` entry."""
        try:
            contest_id = data["id"]
            name = data["name"]
            phase = ContestPhase(data["phase"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedUpstreamError(f"Invalid contest entry {data!r}: {e}") from e

        if not isinstance(contest_id, int) or not isinstance(name, str):
            raise MalformedUpstreamError(f"Invalid contest entry {data!r}")

        return cls(
            id=contest_id,
            name=name,
            phase=phase,
            start_time_seconds=data.get("startTimeSeconds"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phase": self.phase.value,
            "startTimeSeconds": self.start_time_seconds,
        }


@dataclass(frozen=True)
class ProblemHeader:
    """One problem entry of a standings header."""

    index: str
    name: str | None = None


@dataclass(frozen=True)
class ContestSummary:
    """Problem set overview of a single contest."""

    contest_id: int
    contest_name: str
    problem_indexes: tuple[str, ...]

    @property
    def total_problems(self) -> int:
        return len(self.problem_indexes)


@dataclass
class ContestListing:
    """Result of a category listing: summaries plus degraded-contest warnings."""

    contests: list[ContestSummary] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
