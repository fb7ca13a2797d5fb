"""Codeforces contest and problem aggregation service."""

__version__ = "0.1.0"
