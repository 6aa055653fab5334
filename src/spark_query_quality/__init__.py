"""Spark Query Quality.

Rule-based scoring of free-text audience search queries for the "intent" and
"b2b" search modes: a 0-100 score, per-rule pass/fail breakdown and
actionable suggestions.
"""

__version__ = "0.1.0"

from .core import SearchMode, ValidationReport, validate_query

__all__ = ["SearchMode", "ValidationReport", "__version__", "validate_query"]
