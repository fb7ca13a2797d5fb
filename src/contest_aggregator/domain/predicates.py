"""Contest category predicates.

A predicate is any ``Callable[[str], bool]`` applied to the contest name.
Listing log lines name the predicate by its ``repr``.
"""

import re
from collections.abc import Callable

CategoryPredicate = Callable[[str], bool]


class NameContains:
    """Matches contests whose name contains ``category`` (e.g. ``"Div. 2"``)."""

    def __init__(self, category: str):
        self.category = category

    def __call__(self, name: str) -> bool:
        return self.category in name

    def __repr__(self) -> str:
        return f"NameContains({self.category!r})"


class NameMatches:
    """Matches contests whose name matches a regular expression."""

    def __init__(self, pattern: str, flags: int = 0):
        self.pattern = re.compile(pattern, flags)

    def __call__(self, name: str) -> bool:
        return self.pattern.search(name) is not None

    def __repr__(self) -> str:
        return f"NameMatches({self.pattern.pattern!r})"
