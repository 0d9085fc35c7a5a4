"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from pathwise.database import dispose_engines
from pathwise.logger import get_logger, reset_logger
from pathwise.models import CareerPathRecord, GradedAttempt, InterestAnswer
from pathwise.storage import InMemoryDataSource


@pytest.fixture(autouse=True)
def quiet_logger():
    """Silent global logger so tests never write log files."""
    reset_logger()
    logger = get_logger(enable_console=False, enable_file=False)
    yield logger
    reset_logger()


@pytest.fixture(autouse=True)
def fresh_engines():
    """Drop cached database engines between tests."""
    yield
    dispose_engines()


@pytest.fixture
def catalog() -> List[CareerPathRecord]:
    """Catalog with one record per known path."""
    return [
        CareerPathRecord(id="cp-fs", name="Full-Stack Web Development"),
        CareerPathRecord(id="cp-ds", name="Data Science & Analytics"),
        CareerPathRecord(id="cp-cloud", name="Cloud Infrastructure"),
        CareerPathRecord(id="cp-mobile", name="Mobile App Development"),
        CareerPathRecord(id="cp-sec", name="Cybersecurity"),
    ]


@pytest.fixture
def backend_answers() -> List[InterestAnswer]:
    """A single answer preferring backend work."""
    return [InterestAnswer(question_id=2, response="I prefer Backend work")]


@pytest.fixture
def data_heavy_attempts() -> List[GradedAttempt]:
    """Perfect data accuracy, one miss in every other category."""
    attempts = [GradedAttempt(is_correct=True, category="data") for _ in range(10)]
    for category in ("frontend", "backend", "cloud", "mobile", "security"):
        attempts.append(GradedAttempt(is_correct=False, category=category))
    return attempts


@pytest.fixture
def data_heavy_answers() -> List[InterestAnswer]:
    """Answers leaning strongly towards data work."""
    return [
        InterestAnswer(question_id=3, response="5"),
        InterestAnswer(question_id=4, response="Analyzing data"),
        InterestAnswer(question_id=5, response="5"),
    ]


@pytest.fixture
def memory_source(catalog, backend_answers) -> InMemoryDataSource:
    """In-memory source with one questionnaire-only user."""
    return InMemoryDataSource(
        career_paths=catalog,
        interest_answers={"u-backend": backend_answers},
    )


@pytest.fixture
def seed_data() -> Dict[str, Any]:
    """Valid seed document."""
    return {
        "career_paths": [
            {"id": "cp-fs", "name": "Full-Stack Web Development", "description": "Web apps end to end"},
            {"id": "cp-ds", "name": "Data Science & Analytics"},
            {"id": "cp-cloud", "name": "Cloud Infrastructure"},
            {"id": "cp-mobile", "name": "Mobile App Development"},
            {"id": "cp-sec", "name": "Cybersecurity"},
        ],
        "users": {
            "alice": {
                "attempts": [
                    {"question_id": "q1", "category": "frontend", "is_correct": True},
                    {"question_id": "q2", "category": "frontend", "is_correct": False},
                    {"question_id": "q3", "category": None, "is_correct": True},
                ],
                "interest_answers": [
                    {"question_id": 1, "response": "5"},
                    {"question_id": 2, "response": "Frontend development"},
                ],
            },
            "bob": {
                "attempts": [
                    {"question_id": "q1", "category": "backend", "is_correct": True},
                ],
                "interest_answers": [],
            },
        },
    }


@pytest.fixture
def seed_file(tmp_path, seed_data) -> Path:
    """Seed document written to disk."""
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(seed_data, indent=2))
    return path
