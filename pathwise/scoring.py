"""
Scoring Logic for Career Paths.

Responsibilities:
- Blend category performance and interest affinity into a raw score
  per career path.
- Convert raw scores into a ranked probability distribution.

Non-Responsibilities:
- No data access.
- No catalog mapping.
- No fallback for missing performance data; callers supply it.

Invariant:
Missing category data must never be treated as zero accuracy.
Given identical inputs, scores and probabilities are identical.
"""

import math
from typing import Dict, List

from .models import AffinityVector, CareerPathCandidate, CategoryPerformance
from .tables import (
    CAREER_PATH_WEIGHTS,
    INTEREST_CAP,
    INTEREST_SCALE,
    INTEREST_WEIGHT,
    PERFORMANCE_SCALE,
    PERFORMANCE_WEIGHT,
    SOFTMAX_TEMPERATURE,
)


def blend_scores(performance_score: float, interest_score: float) -> float:
    """60/40 blend of scaled performance and capped, scaled interest."""
    normalized_performance = performance_score * PERFORMANCE_SCALE
    normalized_interest = min(interest_score * INTEREST_SCALE, INTEREST_CAP)
    return normalized_performance * PERFORMANCE_WEIGHT + normalized_interest * INTEREST_WEIGHT


def score_paths(
    performance: CategoryPerformance,
    affinities: AffinityVector,
    weights: Dict[str, Dict[str, float]] = CAREER_PATH_WEIGHTS,
) -> List[CareerPathCandidate]:
    """Return one unnormalized candidate per path, in table order."""
    candidates: List[CareerPathCandidate] = []

    for path_key, vector in weights.items():
        performance_score = 0.0
        interest_score = 0.0

        for category, weight in vector.items():
            stats = performance.get(category)
            if stats is not None and stats.total > 0:
                performance_score += stats.accuracy * weight
            interest_score += affinities.get(category, 0.0) * weight

        candidates.append(
            CareerPathCandidate(
                path_key=path_key,
                raw_score=blend_scores(performance_score, interest_score),
                performance_score=performance_score,
                interest_score=interest_score,
            )
        )

    return candidates


def normalize_scores(
    candidates: List[CareerPathCandidate],
    temperature: float = SOFTMAX_TEMPERATURE,
) -> List[CareerPathCandidate]:
    """
    Softmax over raw scores, sorted by probability descending.

    Shifting by the max score leaves the distribution unchanged and keeps
    exp() from overflowing. Ties keep their input order.
    """
    if not candidates:
        return []

    top = max(c.raw_score for c in candidates)
    exps = [math.exp((c.raw_score - top) / temperature) for c in candidates]
    total = sum(exps)

    for candidate, e in zip(candidates, exps):
        candidate.probability = e / total

    return sorted(candidates, key=lambda c: c.probability, reverse=True)
