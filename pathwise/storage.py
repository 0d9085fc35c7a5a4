"""
Data sources for the recommender.

A data source provides three reads, each returning a fully
materialized list:

- get_question_attempts(user_id) -> List[GradedAttempt]
- get_interest_answers(user_id) -> List[InterestAnswer]
- get_career_paths() -> List[CareerPathRecord]

Repositories must not encode domain decisions; fallbacks and
preconditions belong to the recommender.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import OperationalError

from .database import CareerPath, InterestResponse, QuestionAttempt, get_session, init_database
from .logger import get_logger
from .models import CareerPathRecord, GradedAttempt, InterestAnswer
from .retry import exponential_backoff


class InMemoryDataSource:
    """Data source backed by plain lists, for embedding and tests."""

    def __init__(
        self,
        career_paths: Optional[List[CareerPathRecord]] = None,
        attempts: Optional[Dict[str, List[GradedAttempt]]] = None,
        interest_answers: Optional[Dict[str, List[InterestAnswer]]] = None,
    ):
        self.career_paths = list(career_paths or [])
        self.attempts = dict(attempts or {})
        self.interest_answers = dict(interest_answers or {})

    def get_question_attempts(self, user_id: str) -> List[GradedAttempt]:
        return list(self.attempts.get(user_id, []))

    def get_interest_answers(self, user_id: str) -> List[InterestAnswer]:
        return list(self.interest_answers.get(user_id, []))

    def get_career_paths(self) -> List[CareerPathRecord]:
        return list(self.career_paths)


def _log_retry(attempt: int, error: Exception, delay: float) -> None:
    get_logger().warning(
        "Database read failed, retrying",
        attempt=attempt,
        delay=delay,
        error=str(error),
    )


_read_with_retry = exponential_backoff(
    max_retries=2,
    base_delay=0.2,
    max_delay=2.0,
    exceptions=(OperationalError,),
    on_retry=_log_retry,
)


class SqlDataSource:
    """Data source reading from the SQLite database."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    @_read_with_retry
    def get_question_attempts(self, user_id: str) -> List[GradedAttempt]:
        session = get_session(self.db_path)
        try:
            rows = (
                session.query(QuestionAttempt)
                .filter_by(user_id=user_id)
                .order_by(QuestionAttempt.id)
                .all()
            )
            return [GradedAttempt(is_correct=bool(r.is_correct), category=r.category) for r in rows]
        finally:
            session.close()

    @_read_with_retry
    def get_interest_answers(self, user_id: str) -> List[InterestAnswer]:
        session = get_session(self.db_path)
        try:
            rows = (
                session.query(InterestResponse)
                .filter_by(user_id=user_id)
                .order_by(InterestResponse.id)
                .all()
            )
            return [InterestAnswer(question_id=r.question_id, response=r.response) for r in rows]
        finally:
            session.close()

    @_read_with_retry
    def get_career_paths(self) -> List[CareerPathRecord]:
        session = get_session(self.db_path)
        try:
            rows = (
                session.query(CareerPath)
                .order_by(CareerPath.sort_order, CareerPath.created_at)
                .all()
            )
            return [CareerPathRecord(id=r.id, name=r.name, description=r.description or "") for r in rows]
        finally:
            session.close()


def load_seed(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def seed_database(db_path: Path, data: Dict[str, Any]) -> Dict[str, int]:
    """
    Load a validated seed document into the database.

    Existing career paths with the same id are updated in place.
    Attempts and answers are appended.

    Returns:
        Counts of inserted/updated rows by kind
    """
    init_database(db_path)
    session = get_session(db_path)
    counts = {"paths_new": 0, "paths_updated": 0, "attempts": 0, "interest_answers": 0}

    try:
        for i, path in enumerate(data.get("career_paths", [])):
            existing = session.query(CareerPath).filter_by(id=path["id"]).first()
            if existing:
                existing.name = path["name"]
                existing.description = path.get("description", "")
                existing.sort_order = i
                counts["paths_updated"] += 1
                continue
            session.add(
                CareerPath(
                    id=path["id"],
                    name=path["name"],
                    description=path.get("description", ""),
                    sort_order=i,
                )
            )
            counts["paths_new"] += 1

        for user_id, record in data.get("users", {}).items():
            for attempt in record.get("attempts", []):
                session.add(
                    QuestionAttempt(
                        user_id=user_id,
                        question_id=str(attempt.get("question_id", "")),
                        is_correct=attempt["is_correct"],
                        category=attempt.get("category"),
                    )
                )
                counts["attempts"] += 1
            for answer in record.get("interest_answers", []):
                session.add(
                    InterestResponse(
                        user_id=user_id,
                        question_id=answer["question_id"],
                        response=str(answer["response"]),
                    )
                )
                counts["interest_answers"] += 1

        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    get_logger().info("Seed loaded", db_path=str(db_path), **counts)
    return counts
