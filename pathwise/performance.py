"""
Performance Aggregation.

Responsibilities:
- Reduce graded attempts into per-category correct/total counts.
- Provide the neutral table used before any quiz data exists.

Non-Responsibilities:
- No weighting.
- No data access.

Invariant:
Each attempt is counted at most once. Attempts without a category
are skipped, never bucketed.
"""

from typing import Iterable

from .models import CategoryPerformance, CategoryStats, GradedAttempt
from .tables import CATEGORIES, NEUTRAL_CORRECT, NEUTRAL_TOTAL


def aggregate_performance(attempts: Iterable[GradedAttempt]) -> CategoryPerformance:
    performance: CategoryPerformance = {}
    for attempt in attempts:
        if not attempt.category:
            continue
        stats = performance.setdefault(attempt.category, CategoryStats())
        stats.total += 1
        if attempt.is_correct:
            stats.correct += 1
    return performance


def neutral_performance() -> CategoryPerformance:
    """Every category at 50% accuracy, for users with no graded attempts."""
    return {c: CategoryStats(correct=NEUTRAL_CORRECT, total=NEUTRAL_TOTAL) for c in CATEGORIES}
