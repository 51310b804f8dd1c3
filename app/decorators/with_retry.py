"""Retry decorator for transient database and hashing failures."""

from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from sqlalchemy.exc import OperationalError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.monitoring import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Dropped connections and server restarts; integrity errors are never retried
RETRIABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    OperationalError,
)


def _warn_before_sleep(attempts: int) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        target = retry_state.fn.__name__ if retry_state.fn else "unknown"
        logger.warning(
            f"{target} failed ({type(error).__name__}), attempt "
            f"{retry_state.attempt_number}/{attempts}, retrying in {delay:.2f}s",
        )

    return before_sleep


def with_retry(
    max_retries: int = 3,
    base_delay: float = 0.1,
    max_delay: float = 2.0,
    exec_retry: type[Exception] | tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async callable with exponential backoff.

    The last failure is re-raised unchanged once attempts run out.

    Args:
        max_retries: Total attempts, counting the first call.
        base_delay: First backoff delay in seconds.
        max_delay: Upper bound for a single backoff delay.
        exec_retry: Exception type(s) that trigger another attempt.

    Returns:
        Decorator applying the retry policy.
    """
    return retry(
        reraise=True,
        retry=retry_if_exception_type(exec_retry),
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=base_delay, min=base_delay, max=max_delay),
        before_sleep=_warn_before_sleep(max_retries),
    )
