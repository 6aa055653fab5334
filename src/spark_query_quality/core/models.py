"""Pydantic data models shared by detectors, rules and callers.

None of these carry timestamps or generated ids: validating the same query
twice must serialise to identical JSON.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from .errors import InvalidModeError


class SearchMode(str, Enum):
    """Targeting context of a query."""

    INTENT = "intent"
    B2B = "b2b"

    @classmethod
    def parse(cls, value: Union["SearchMode", str]) -> "SearchMode":
        """Accept a member or its exact string value, rejecting anything else."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        raise InvalidModeError(value)


class Detection(BaseModel):
    """Result of running one detector family over a query."""

    detected: bool
    matches: list[str] = Field(default_factory=list)

    @classmethod
    def from_matches(cls, matches: list[str]) -> "Detection":
        """De-duplicate case-insensitively, keeping the first spelling seen."""
        seen: dict[str, str] = {}
        for match in matches:
            seen.setdefault(match.lower(), match)
        unique = list(seen.values())
        return cls(detected=bool(unique), matches=unique)


class RuleOutcome(BaseModel):
    """What a single rule check reports. ``passed`` and ``score`` are set independently."""

    passed: bool
    score: int = Field(ge=0, le=100)
    message: str
    details: Optional[str] = None


class RuleResult(RuleOutcome):
    """A rule outcome labelled with the rule that produced it."""

    rule_id: str
    name: str
    description: str = ""
    weight: int = Field(gt=0)


class ValidationReport(BaseModel):
    """Full scoring report for one query."""

    overall_score: int = Field(ge=0, le=100)
    passed: bool
    mode: SearchMode
    rules: list[RuleResult]
    suggestions: list[str] = Field(default_factory=list)

    @property
    def passed_rules(self) -> list[str]:
        return [r.name for r in self.rules if r.passed]

    @property
    def failed_rules(self) -> list[str]:
        return [r.name for r in self.rules if not r.passed]

    def rule(self, rule_id: str) -> RuleResult:
        for result in self.rules:
            if result.rule_id == rule_id:
                return result
        raise KeyError(rule_id)


class QualityLevel(str, Enum):
    """Coarse quality tier of an overall score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    VERY_POOR = "very_poor"


class QualityRating(BaseModel):
    """Display tier for a score."""

    level: QualityLevel
    label: str
    color: str


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class QueryIssue(BaseModel):
    """A failing rule rendered as an actionable issue."""

    rule_id: str
    severity: IssueSeverity
    message: str
    suggestion: Optional[str] = None


class QualityAssessment(BaseModel):
    """Everything a score badge needs, derived from a report."""

    score: int = Field(ge=0, le=100)
    level: QualityLevel
    label: str
    color: str
    stars: str
    passed: bool
    passed_rules: list[str] = Field(default_factory=list)
    failed_rules: list[str] = Field(default_factory=list)
    issues: list[QueryIssue] = Field(default_factory=list)
