"""
Structured logging system for Pathwise.

Provides centralized logging with console and file outputs,
log levels, and metrics tracking for monitoring recommendation health.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .env import LOG_LEVELS, get_settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring recommendation outcomes.
    """

    def __init__(
        self,
        name: str = "pathwise",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        if level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{level}'. Use one of: {', '.join(LOG_LEVELS)}")
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "recommendations_requested": 0,
            "recommendations_served": 0,
            "neutral_performance_used": 0,
            "fallback_mappings": 0,
            "errors_by_type": {},
        }

        if enable_console:
            # stderr keeps `recommend --json` output parseable
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"pathwise_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_request(self):
        """Increment recommendation request counter."""
        self.metrics["recommendations_requested"] += 1

    def record_served(self):
        self.metrics["recommendations_served"] += 1

    def record_neutral_performance(self):
        """Record a request scored with the neutral performance table."""
        self.metrics["neutral_performance_used"] += 1

    def record_fallback_mapping(self, count: int = 1):
        """Record path keys that fell back to the first catalog record."""
        self.metrics["fallback_mappings"] += count

    def record_failure(self, error_type: str):
        """Record a failed recommendation by error type."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics with the served/requested rate."""
        metrics_copy = self.metrics.copy()
        requested = metrics_copy["recommendations_requested"]
        if requested > 0:
            metrics_copy["success_rate"] = round(
                metrics_copy["recommendations_served"] / requested, 3
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        requested = metrics["recommendations_requested"]
        served = metrics["recommendations_served"]
        overall_rate = 0
        if requested > 0:
            overall_rate = round(served / requested * 100, 1)

        self.info("=== Recommendation Session Metrics ===")
        self.info(f"Recommendations: {served}/{requested} ({overall_rate}% success)")
        self.info(f"Neutral performance used: {metrics['neutral_performance_used']}")
        self.info(f"Fallback mappings: {metrics['fallback_mappings']}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "pathwise",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and file logging default to PATHWISE_LOG_LEVEL and
    PATHWISE_LOG_DIR when not given.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        settings = get_settings()
        if "log_dir" not in kwargs and "enable_file" not in kwargs:
            kwargs["log_dir"] = settings.log_dir
            kwargs["enable_file"] = settings.log_dir is not None
        _global_logger = StructuredLogger(name=name, level=level or settings.log_level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
