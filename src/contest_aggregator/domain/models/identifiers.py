"""Value objects for contest and problem identification."""

import re
from dataclasses import dataclass

from contest_aggregator.domain.exceptions import ValidationError

# Uppercase letter, optionally followed by a subproblem number (B1, F2, ...).
PROBLEM_INDEX_PATTERN = re.compile(r"^[A-Z][1-8]?$")


def parse_contest_id(value: int | str) -> int:
    """Validate a contest id given as an int or a decimal string."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid contest id: {value!r}")
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            raise ValidationError(f"Invalid contest id: {value!r}")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Contest id must be a positive integer: {value!r}")
    return value


def parse_problem_index(value: str) -> str:
    """Validate a problem index such as ``A`` or ``B1``."""
    if not isinstance(value, str) or not PROBLEM_INDEX_PATTERN.match(value):
        raise ValidationError(f"Invalid problem index: {value!r}")
    return value


@dataclass(frozen=True)
class ProblemIdentifier:
    """Identifies a specific Codeforces problem."""

    contest_id: int
    index: str

    @classmethod
    def parse(cls, contest_id: int | str, index: str) -> "ProblemIdentifier":
        return cls(contest_id=parse_contest_id(contest_id), index=parse_problem_index(index))

    @property
    def cache_key(self) -> str:
        return f"problem:{self.contest_id}:{self.index}"

    def __str__(self) -> str:
        return f"{self.contest_id}/{self.index}"
