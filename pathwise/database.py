"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for the career path catalog, graded
question attempts and interest questionnaire responses.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict

from sqlalchemy import create_engine, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class CareerPath(Base):
    """Career path catalog entry."""

    __tablename__ = "career_paths"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    sort_order = Column(Integer, nullable=False, default=0)  # catalog order; first entry is the fallback
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class QuestionAttempt(Base):
    """A graded answer to a quiz question."""

    __tablename__ = "question_attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    question_id = Column(String, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    category = Column(String, nullable=True)  # frontend, backend, data, ...
    created_at = Column(DateTime, nullable=False, default=datetime.now)


class InterestResponse(Base):
    """An answer to one interest questionnaire item."""

    __tablename__ = "interest_responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    question_id = Column(Integer, nullable=False)
    response = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


_engines: Dict[str, Engine] = {}


def get_engine(db_path: Path) -> Engine:
    """
    Get the engine for a database file, creating it on first use.

    One engine is kept per resolved path so repeated reads share its
    connection pool.
    """
    key = str(Path(db_path).resolve())
    engine = _engines.get(key)
    if engine is None:
        engine = create_engine(f"sqlite:///{key}")
        _engines[key] = engine
    return engine


def dispose_engines() -> None:
    """Dispose and forget every cached engine."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(get_engine(db_path))


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    Session = sessionmaker(bind=get_engine(db_path))
    return Session()
