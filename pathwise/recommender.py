"""
Career Path Recommendation Orchestrator.

Responsibilities:
- Load attempts, answers and catalog from a data source.
- Run aggregation, affinity mapping, scoring, normalization and
  resolution in order.
- Enforce the questionnaire precondition and compute confidence.

Non-Responsibilities:
- No persistence.
- No scoring formulas; those live in scoring.py and tables.py.

Invariant:
Given the same attempts, answers and catalog, the result is identical.
"""

from typing import Any, Dict, List, Optional, Sequence

from .affinity import map_affinities
from .errors import PrerequisiteMissing, Unresolvable
from .logger import StructuredLogger, get_logger
from .models import CareerPathRecord, GradedAttempt, InterestAnswer, Recommendation
from .performance import aggregate_performance, neutral_performance
from .resolver import resolve_path_ids
from .retry import RetryError
from .scoring import normalize_scores, score_paths
from .tables import CONFIDENCE_CAP


def _performance_or_neutral(attempts: Sequence[GradedAttempt]):
    # Neutral table only when there are no attempts at all; a user with
    # untagged attempts still gets an (empty) aggregated table.
    if attempts:
        return aggregate_performance(attempts), False
    return neutral_performance(), True


def recommend_from_data(
    attempts: Sequence[GradedAttempt],
    answers: Sequence[InterestAnswer],
    catalog: Sequence[CareerPathRecord],
    user_id: Optional[str] = None,
) -> Recommendation:
    """
    Recommend a career path from already loaded data.

    Raises:
        PrerequisiteMissing: no interest answers
        Unresolvable: no top candidate with a path id
    """
    if not answers:
        raise PrerequisiteMissing(user_id)

    performance, _ = _performance_or_neutral(attempts)
    affinities = map_affinities(answers)

    candidates = normalize_scores(score_paths(performance, affinities))
    candidates = resolve_path_ids(candidates, catalog)

    if not candidates or not candidates[0].career_path_id:
        raise Unresolvable("Unable to calculate career recommendation")

    top = candidates[0]
    return Recommendation(
        recommended_path_id=top.career_path_id,
        probabilities=candidates,
        confidence=min(top.probability * 100, CONFIDENCE_CAP),
    )


def explain_from_data(
    attempts: Sequence[GradedAttempt],
    answers: Sequence[InterestAnswer],
) -> Dict[str, Any]:
    """Intermediate values behind a recommendation, for display."""
    performance, neutral = _performance_or_neutral(attempts)
    affinities = map_affinities(answers)
    candidates = normalize_scores(score_paths(performance, affinities))
    return {
        "neutral_performance": neutral,
        "performance": {
            c: {"correct": s.correct, "total": s.total, "accuracy": round(s.accuracy, 4)}
            for c, s in performance.items()
        },
        "affinities": affinities,
        "paths": [
            {
                "path_key": c.path_key,
                "performance_score": c.performance_score,
                "interest_score": c.interest_score,
                "score": c.raw_score,
                "probability": c.probability,
            }
            for c in candidates
        ],
    }


class Recommender:
    """Recommends career paths for users of a data source."""

    def __init__(self, source, logger: Optional[StructuredLogger] = None):
        self.source = source
        self.logger = logger or get_logger()

    def _read(self, user_id: str, read, *args):
        try:
            return list(read(*args))
        except RetryError as e:
            self.logger.record_failure("RetryError")
            self.logger.error("Data source read failed", user_id=user_id, error=str(e))
            raise

    def _load(self, user_id: str):
        attempts: List[GradedAttempt] = self._read(user_id, self.source.get_question_attempts, user_id)
        answers: List[InterestAnswer] = self._read(user_id, self.source.get_interest_answers, user_id)
        if not answers:
            self.logger.record_failure("PrerequisiteMissing")
            self.logger.warning("Interest assessment not completed", user_id=user_id)
            raise PrerequisiteMissing(user_id)
        return attempts, answers

    def recommend(self, user_id: str) -> Recommendation:
        self.logger.record_request()
        attempts, answers = self._load(user_id)

        if not attempts:
            self.logger.record_neutral_performance()

        catalog: List[CareerPathRecord] = self._read(user_id, self.source.get_career_paths)

        try:
            result = recommend_from_data(attempts, answers, catalog, user_id=user_id)
        except Unresolvable:
            self.logger.record_failure("Unresolvable")
            self.logger.error(
                "Unable to calculate career recommendation",
                user_id=user_id,
                catalog_size=len(catalog),
            )
            raise

        self.logger.record_served()
        self.logger.info(
            "Recommendation served",
            user_id=user_id,
            recommended_path_id=result.recommended_path_id,
            confidence=round(result.confidence, 2),
            attempts=len(attempts),
            answers=len(answers),
        )
        return result

    def explain(self, user_id: str) -> Dict[str, Any]:
        attempts, answers = self._load(user_id)
        return explain_from_data(attempts, answers)
