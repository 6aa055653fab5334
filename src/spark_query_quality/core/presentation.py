"""Display helpers derived from a final score.

These never feed back into scoring; a badge is derived from a report, not
the other way round.
"""

from __future__ import annotations

from .models import (
    IssueSeverity,
    QualityAssessment,
    QualityLevel,
    QualityRating,
    QueryIssue,
    ValidationReport,
)
from .scoring import round_half_up

FILLED_STAR = "⭐"
EMPTY_STAR = "☆"
MAX_STARS = 5

# (minimum score, level, label, colour), highest first
QUALITY_TIERS = [
    (90, QualityLevel.EXCELLENT, "Excellent", "green"),
    (75, QualityLevel.GOOD, "Good", "blue"),
    (60, QualityLevel.FAIR, "Fair", "yellow"),
    (40, QualityLevel.POOR, "Poor", "red"),
]
BOTTOM_TIER = QualityRating(level=QualityLevel.VERY_POOR, label="Very Poor", color="red")


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def get_quality_level(score: int) -> QualityRating:
    for minimum, level, label, color in QUALITY_TIERS:
        if score >= minimum:
            return QualityRating(level=level, label=label, color=color)
    return BOTTOM_TIER.model_copy()


def get_score_color(score: int) -> str:
    return get_quality_level(score).color


def get_star_rating(score: int) -> str:
    """``round(score / 20)`` filled stars, the rest empty, five symbols in total."""
    filled = round_half_up(_clamp(int(score)), 100 // MAX_STARS)
    return FILLED_STAR * filled + EMPTY_STAR * (MAX_STARS - filled)


def collect_issues(report: ValidationReport) -> list[QueryIssue]:
    """Failing rules as issues; a rule that scored zero is an error, anything else a warning."""
    return [
        QueryIssue(
            rule_id=r.rule_id,
            severity=IssueSeverity.ERROR if r.score == 0 else IssueSeverity.WARNING,
            message=r.message,
            suggestion=r.details,
        )
        for r in report.rules
        if not r.passed
    ]


def assess(report: ValidationReport) -> QualityAssessment:
    rating = get_quality_level(report.overall_score)
    return QualityAssessment(
        score=report.overall_score,
        level=rating.level,
        label=rating.label,
        color=rating.color,
        stars=get_star_rating(report.overall_score),
        passed=report.passed,
        passed_rules=report.passed_rules,
        failed_rules=report.failed_rules,
        issues=collect_issues(report),
    )
