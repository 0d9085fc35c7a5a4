"""
Retry logic with exponential backoff for data-access reads.

The recommendation core is pure and never retried. Only the reads that
load attempts, answers and the catalog go through this decorator, so a
locked or briefly unavailable database does not fail a request.
"""

import time
import functools
from typing import Callable, Type, Tuple, Optional


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""
    pass


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable] = None,
):
    """
    Decorator for retrying functions with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential calculation (delay *= base)
        exceptions: Tuple of exceptions to catch and retry
        on_retry: Optional callback function(attempt, exception, delay)

    Example:
        @exponential_backoff(max_retries=2, exceptions=(OperationalError,))
        def load_catalog(session):
            return session.query(CareerPath).all()
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            delay = base_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt < max_retries:
                        current_delay = min(delay, max_delay)

                        if on_retry:
                            on_retry(attempt + 1, e, current_delay)

                        time.sleep(current_delay)
                        delay *= exponential_base
                    else:
                        raise RetryError(
                            f"Failed after {max_retries + 1} attempts: {str(e)}"
                        ) from e

        return wrapper
    return decorator
