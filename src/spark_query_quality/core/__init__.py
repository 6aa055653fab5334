"""Core query quality engine: patterns, rules, scoring and data models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework, performs no I/O and keeps no state between calls.
"""

from .errors import EmptyQueryError, InvalidModeError, QueryQualityError
from .models import SearchMode, ValidationReport
from .presentation import assess, get_quality_level, get_star_rating
from .rules import ALL_RULES, Rule
from .scoring import PASS_THRESHOLD, validate_query

__all__ = [
    "ALL_RULES",
    "EmptyQueryError",
    "InvalidModeError",
    "PASS_THRESHOLD",
    "QueryQualityError",
    "Rule",
    "SearchMode",
    "ValidationReport",
    "assess",
    "get_quality_level",
    "get_star_rating",
    "validate_query",
]
