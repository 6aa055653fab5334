"""Spark Query Quality MCP Server.

FastMCP server exposing the query quality engine as read-only tools.
Run: spark-query-quality-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from . import __version__
from .core.errors import EmptyQueryError
from .core.models import SearchMode
from .core.presentation import assess, get_quality_level, get_star_rating
from .core.rules import ALL_RULES
from .core.scoring import PASS_THRESHOLD, total_weight, validate_query

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)


def _configure_logging() -> None:
    level = os.environ.get("SPARK_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging; the engine itself needs no setup or teardown."""
    _configure_logging()
    logger.info("Spark Query Quality %s started with %d rules", __version__, len(ALL_RULES))
    try:
        yield
    finally:
        logger.info("Spark Query Quality stopped")


mcp = FastMCP(
    "Spark Query Quality",
    instructions="Score audience search queries before running them. Use mode 'intent' for behavioural/interest queries and 'b2b' for company/firmographic queries. Rewrite the query until it passes (score 70 or above).",
    lifespan=lifespan,
)


# ─── Tool 1: Validate Query ──────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def spark_validate_query(query: str, mode: str) -> dict:
    """Score a search query 0-100 against the quality rules for a search mode.

    Args:
        query: The free-text search query to check. Must not be blank.
        mode: 'intent' (behaviours and interests) or 'b2b' (company attributes). Required.
    """
    search_mode = SearchMode.parse(mode)
    if not query.strip():
        logger.warning("Rejected blank query (mode=%s)", search_mode.value)
        raise EmptyQueryError()

    report = validate_query(query, search_mode)
    assessment = assess(report)
    return {
        "title": "Query Quality",
        "query": query,
        **report.model_dump(mode="json"),
        "assessment": assessment.model_dump(mode="json"),
        "summary": _report_summary(report.overall_score, report.passed, report.suggestions),
    }


def _report_summary(score: int, passed: bool, suggestions: list[str]) -> str:
    rating = get_quality_level(score)
    verdict = "ready to run" if passed else f"below the {PASS_THRESHOLD} threshold"
    summary = f"{rating.label} ({score}/100), {verdict}."
    if suggestions:
        summary += " Fix: " + "; ".join(suggestions)
    return summary


# ─── Tool 2: Quality Level ───────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def spark_quality_level(score: int) -> dict:
    """Label, colour tier and star rating for a 0-100 quality score.

    Args:
        score: Overall quality score between 0 and 100.
    """
    if not 0 <= score <= 100:
        raise ValueError(f"score must be between 0 and 100, got {score}")
    rating = get_quality_level(score)
    return {
        "score": score,
        **rating.model_dump(mode="json"),
        "stars": get_star_rating(score),
        "passed": score >= PASS_THRESHOLD,
    }


# ─── Tool 3: Rule Catalogue ──────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
def spark_rules() -> dict:
    """The quality rules every query is scored against, with their weights."""
    weight_sum = total_weight()
    return {
        "title": "Query Quality Rules",
        "pass_threshold": PASS_THRESHOLD,
        "total_weight": weight_sum,
        "modes": [m.value for m in SearchMode],
        "rules": [
            {
                "id": rule.id,
                "name": rule.name,
                "description": rule.description,
                "weight": rule.weight,
                "share": round(rule.weight / weight_sum, 3),
            }
            for rule in ALL_RULES
        ],
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
