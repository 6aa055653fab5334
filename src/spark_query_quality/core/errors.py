"""Argument-validation errors raised at the engine boundary."""

from __future__ import annotations


class QueryQualityError(Exception):
    """Base class for errors raised by the query quality engine."""


class InvalidModeError(QueryQualityError, ValueError):
    """The search mode is not one of the recognised values."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"Invalid search mode {mode!r}. Expected one of: 'intent', 'b2b'")


class EmptyQueryError(QueryQualityError, ValueError):
    """The query is empty or whitespace-only."""

    def __init__(self):
        super().__init__("Query must contain at least one non-whitespace character")
