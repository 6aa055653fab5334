"""Validation rules, one weighted independent heuristic per check.

Every check is a pure function ``(query, mode) -> RuleOutcome`` and never
raises for string input, including the empty string. Rules are declared once,
in display order, in ``ALL_RULES``; the aggregator only relies on that list.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable

from .models import RuleOutcome, RuleResult, SearchMode
from .patterns import (
    detect_b2b_attributes,
    detect_b2b_forbidden_intent,
    detect_demographics,
    detect_intent_signals,
    detect_location,
    detect_persona,
    detect_question_format,
    find_vague_terms,
)

MIN_LENGTH = 10
MAX_LENGTH = 500
OPTIMAL_LENGTH = (20, 200)

_DIGIT = re.compile(r"\d")

CheckFn = Callable[[str, SearchMode], RuleOutcome]


@dataclass(frozen=True)
class Rule:
    """A named, weighted evaluator. Weights are relative, not normalised."""

    id: str
    name: str
    description: str
    weight: int
    check: CheckFn

    def evaluate(self, query: str, mode: SearchMode) -> RuleResult:
        outcome = self.check(query, mode)
        return RuleResult(
            rule_id=self.id,
            name=self.name,
            description=self.description,
            weight=self.weight,
            **outcome.model_dump(),
        )


def check_length(query: str, mode: SearchMode) -> RuleOutcome:
    length = len(query.strip())

    if length < MIN_LENGTH:
        return RuleOutcome(
            passed=False,
            score=0,
            message="Query too short",
            details=f"{length} characters (minimum {MIN_LENGTH})",
        )
    if length > MAX_LENGTH:
        return RuleOutcome(
            passed=False,
            score=50,
            message="Query too long",
            details=f"{length} characters (maximum {MAX_LENGTH})",
        )
    if OPTIMAL_LENGTH[0] <= length <= OPTIMAL_LENGTH[1]:
        return RuleOutcome(passed=True, score=100, message="Optimal length", details=f"{length} characters")
    return RuleOutcome(passed=True, score=80, message="Acceptable length", details=f"{length} characters")


def check_vague_terms(query: str, mode: SearchMode) -> RuleOutcome:
    found = find_vague_terms(query)
    if not found:
        return RuleOutcome(passed=True, score=100, message="No marketing language detected")
    return RuleOutcome(
        passed=False,
        score=30 if len(found) == 1 else 0,
        message="Contains forbidden marketing language",
        details=f"Remove: {', '.join(found)}",
    )


def check_question_format(query: str, mode: SearchMode) -> RuleOutcome:
    if detect_question_format(query).detected:
        return RuleOutcome(
            passed=False,
            score=0,
            message="Questions are strictly forbidden",
            details="Rewrite as keywords describing what you want",
        )
    return RuleOutcome(passed=True, score=100, message="Proper keyword format")


def _score_violations(count: int) -> int:
    if count >= 3:
        return 0
    return 20 if count == 2 else 40


def _check_intent_purity(query: str) -> RuleOutcome:
    violations = []
    for category, detection in (
        ("persona", detect_persona(query)),
        ("demographic", detect_demographics(query)),
        ("location", detect_location(query)),
    ):
        violations.extend(f'{category}: "{m}"' for m in detection.matches)

    if violations:
        return RuleOutcome(
            passed=False,
            score=_score_violations(len(violations)),
            message="Intent mode: Focus on behaviors and interests, not WHO people are",
            details=f"Remove: {', '.join(violations)}",
        )

    # Intent signals never offset a violation; they are only required once the query is clean.
    if not detect_intent_signals(query).detected:
        return RuleOutcome(
            passed=False,
            score=50,
            message="Intent mode requires behavioral signals",
            details="Add: interested in, passion for, care about, problem with, goal to",
        )
    return RuleOutcome(
        passed=True,
        score=100,
        message="Pure intent query - focuses on behaviors and interests",
    )


def _check_b2b_purity(query: str) -> RuleOutcome:
    forbidden = detect_b2b_forbidden_intent(query)
    if forbidden.detected:
        quoted = [f'"{m}"' for m in forbidden.matches]
        return RuleOutcome(
            passed=False,
            score=0 if len(quoted) >= 2 else 40,
            message="B2B mode: Describe company attributes, not intent or behavior",
            details=f"Remove intent language: {', '.join(quoted)}",
        )

    if not detect_b2b_attributes(query).detected:
        return RuleOutcome(
            passed=False,
            score=50,
            message="B2B mode requires company-specific attributes",
            details="Add: companies, revenue, employees, industry, SaaS, technology",
        )
    return RuleOutcome(
        passed=True,
        score=100,
        message="Pure B2B query - focuses on company attributes",
    )


def check_mode_purity(query: str, mode: SearchMode) -> RuleOutcome:
    """Keep intent queries behavioural and B2B queries firmographic."""
    if mode is SearchMode.INTENT:
        return _check_intent_purity(query)
    return _check_b2b_purity(query)


def check_specificity(query: str, mode: SearchMode) -> RuleOutcome:
    meaningful = sum(1 for word in query.lower().split() if len(word) > 4)
    has_numbers = bool(_DIGIT.search(query))

    if meaningful >= 5 and has_numbers:
        return RuleOutcome(passed=True, score=100, message="Highly specific query")
    if meaningful >= 3:
        return RuleOutcome(passed=True, score=80, message="Moderately specific")
    return RuleOutcome(
        passed=False,
        score=40,
        message="Lacks specificity",
        details="Add more concrete details and specific terms",
    )


def check_keyword_density(query: str, mode: SearchMode) -> RuleOutcome:
    counts = Counter(word for word in query.lower().split() if len(word) > 3)
    max_repetition = max(counts.values(), default=0)

    # No long words at all means nothing is repeated.
    if max_repetition <= 1:
        return RuleOutcome(passed=True, score=100, message="No keyword repetition")
    if max_repetition == 2:
        return RuleOutcome(passed=True, score=80, message="Minimal repetition")

    repeated = [word for word, n in counts.items() if n == max_repetition]
    return RuleOutcome(
        passed=False,
        score=50 if max_repetition == 3 else 20,
        message=f"Excessive keyword repetition ({', '.join(repeated)} x{max_repetition})",
        details="Use more varied terminology",
    )


def check_actionability(query: str, mode: SearchMode) -> RuleOutcome:
    word_count = len(query.split())

    if word_count < 3:
        return RuleOutcome(
            passed=False,
            score=0,
            message="Too vague to be actionable",
            details="Add more context and details",
        )
    if word_count >= 5:
        return RuleOutcome(passed=True, score=100, message="Clear and actionable")
    return RuleOutcome(passed=True, score=70, message="Reasonably actionable")


ALL_RULES: tuple[Rule, ...] = (
    Rule("length", "Length Check", "Query should be 10-500 characters", 10, check_length),
    Rule("vague-terms", "No Marketing Language", "Strictly forbid vague marketing terms", 15, check_vague_terms),
    Rule("question-format", "No Questions", "Use keywords only, never questions", 15, check_question_format),
    Rule("mode-purity", "Mode Purity", "Context-aware mode separation", 30, check_mode_purity),
    Rule("specificity", "Specificity", "Include specific, concrete details", 15, check_specificity),
    Rule("keyword-density", "No Keyword Stuffing", "Avoid excessive keyword repetition", 10, check_keyword_density),
    Rule("actionability", "Actionability", "Query is clear and actionable", 5, check_actionability),
)
