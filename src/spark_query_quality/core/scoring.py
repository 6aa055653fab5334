"""Weighted score aggregation across the declared rule set.

The overall score is the weight-normalised mean of every rule score. The
divisor is always derived from the rules being run, so appending a rule to
``ALL_RULES`` (or passing a custom sequence) needs no change here.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

from .models import RuleResult, SearchMode, ValidationReport
from .rules import ALL_RULES, Rule

logger = logging.getLogger(__name__)

PASS_THRESHOLD = 70


def round_half_up(numerator: int, denominator: int) -> int:
    """numerator / denominator rounded to the nearest integer, halves up (non-negative inputs)."""
    return (2 * numerator + denominator) // (2 * denominator)


def total_weight(rules: Sequence[Rule] = ALL_RULES) -> int:
    return sum(rule.weight for rule in rules)


def compute_overall_score(results: Sequence[RuleResult]) -> int:
    """Combine rule results into a 0-100 score.

    weighted = sum(score * weight) / 100, normalised by the weight sum and
    scaled back to 100, which is sum(score * weight) / sum(weight). Integer
    arithmetic keeps .5 boundaries exact.
    """
    weight_sum = sum(r.weight for r in results)
    if weight_sum <= 0:
        raise ValueError("Cannot score a query against an empty rule set")

    weighted_total = sum(r.score * r.weight for r in results)
    overall = round_half_up(weighted_total, weight_sum)
    return max(0, min(100, overall))


def build_suggestions(results: Sequence[RuleResult]) -> list[str]:
    """One "{name}: {details}" entry per failing rule that has details, in rule order."""
    return [f"{r.name}: {r.details}" for r in results if not r.passed and r.details]


def validate_query(
    query: str,
    mode: Union[SearchMode, str],
    rules: Sequence[Rule] = ALL_RULES,
) -> ValidationReport:
    """Score a search query against every rule for the given mode.

    Args:
        query: Raw query text. Never mutated; empty input is scored, not rejected.
        mode: ``SearchMode`` or its value, ``"intent"`` or ``"b2b"``.
        rules: Rule set to run, in display order. Defaults to ``ALL_RULES``.

    Raises:
        InvalidModeError: ``mode`` is not a recognised search mode.
        TypeError: ``query`` is not a string.
    """
    search_mode = SearchMode.parse(mode)
    if not isinstance(query, str):
        raise TypeError(f"query must be a string, got {type(query).__name__}")

    results = [rule.evaluate(query, search_mode) for rule in rules]
    overall_score = compute_overall_score(results)

    report = ValidationReport(
        overall_score=overall_score,
        passed=overall_score >= PASS_THRESHOLD,
        mode=search_mode,
        rules=results,
        suggestions=build_suggestions(results),
    )
    logger.debug(
        "Validated %d-char %s query: score=%d passed=%s failed=%s",
        len(query), search_mode.value, report.overall_score, report.passed, report.failed_rules,
    )
    return report
