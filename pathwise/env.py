import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/pathwise.db"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str = "INFO"
    log_dir: Optional[Path] = None


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


def get_settings() -> Settings:
    """
    Read settings from the environment.

    PATHWISE_DB_PATH: SQLite database file (default: data/pathwise.db)
    PATHWISE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    PATHWISE_LOG_DIR: enables file logging into this directory

    Raises:
        ValueError: PATHWISE_LOG_LEVEL is not a known level
    """
    log_level = os.getenv("PATHWISE_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"Invalid PATHWISE_LOG_LEVEL '{log_level}'. Use one of: {', '.join(LOG_LEVELS)}"
        )
    log_dir = os.getenv("PATHWISE_LOG_DIR")
    return Settings(
        db_path=Path(os.getenv("PATHWISE_DB_PATH", DEFAULT_DB_PATH)),
        log_level=log_level,
        log_dir=Path(log_dir) if log_dir else None,
    )
