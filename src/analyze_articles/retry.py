"""Retry with exponential backoff."""

import logging
import time
from typing import Callable, TypeVar

from analyze_articles.errors import FailureCategory, RetryExhaustedError, ServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_retryable(error: Exception) -> bool:
    """Configuration and request-construction errors fail the same way every time."""
    if isinstance(error, ServiceError):
        return error.category is not FailureCategory.REQUEST_ERROR
    return True


def fetch_with_retry(
    operation: Callable[[], T],
    max_retries: int = 3,
    initial_delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    should_retry: Callable[[Exception], bool] = is_retryable,
) -> T:
    """Call `operation` up to `max_retries` times, doubling the wait after each failure.

    An error for which `should_retry` is false is re-raised unchanged without
    further attempts. Once every attempt has failed, the last error is wrapped
    in `RetryExhaustedError`, which keeps its message and (for service errors)
    its `category`, so callers get one exception type for "gave up".

    Raises:
        RetryExhaustedError: After the last attempt fails, chained from its error.
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    delay = initial_delay
    last_error: Exception | None = None

    for attempt in range(1, max_retries + 1):
        logger.info("Attempt %d of %d...", attempt, max_retries)
        try:
            return operation()
        except Exception as e:
            if not should_retry(e):
                logger.warning("Attempt %d failed, not retrying: %s", attempt, e)
                raise
            last_error = e
            logger.warning("Attempt %d failed: %s", attempt, e)

        if attempt < max_retries:
            logger.info("Waiting %.2fs before retry...", delay)
            sleep(delay)
            delay *= 2

    raise RetryExhaustedError(max_retries, last_error) from last_error
