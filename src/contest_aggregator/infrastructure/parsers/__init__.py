"""Parsers for extracting data from external sources."""

from .problem_page_parser import ProblemPageParser

__all__ = ["ProblemPageParser"]
