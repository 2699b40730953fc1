"""
Bounded retry for async calls.

A fixed number of attempts with exponential backoff capped at a maximum
delay. Only errors accepted by the ``should_retry`` predicate are retried;
everything else propagates on the first failure.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from claysculptor.logging_config import get_logger
from claysculptor.utils.exceptions import APIError, NetworkError, RequestTimeoutError

logger = get_logger(__name__)

T = TypeVar("T")

TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_transient(exc: BaseException) -> bool:
    """Return True for errors worth another attempt (network, timeout, 429/5xx)."""
    if isinstance(exc, (NetworkError, RequestTimeoutError)):
        return True
    if isinstance(exc, APIError):
        return exc.status_code in TRANSIENT_STATUS_CODES
    return False


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay before retrying after the zero-based ``attempt``: base * 2**attempt, capped."""
    return min(max_delay, base_delay * (2**attempt))


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 8.0,
    should_retry: Callable[[BaseException], bool] = is_transient,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """
    Await ``fn()`` up to ``attempts`` times.

    Args:
        fn: Zero-argument coroutine factory; called once per attempt
        attempts: Total number of attempts (at least 1)
        base_delay: Delay after the first failure, in seconds
        max_delay: Upper bound for any single delay
        should_retry: Predicate deciding whether an error is transient
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        The first successful result

    Raises:
        The last error once attempts are exhausted, or the first non-transient error
    """
    attempts = max(1, attempts)
    for attempt in range(attempts):
        try:
            return await fn()
        except Exception as exc:
            is_last = attempt == attempts - 1
            if is_last or not should_retry(exc):
                if is_last and attempts > 1:
                    logger.error(
                        "Exhausted retries after %d attempts (last_error=%s: %s)",
                        attempts,
                        type(exc).__name__,
                        exc,
                    )
                raise
            delay = backoff_delay(attempt, base_delay, max_delay)
            logger.warning(
                "Retrying due to %s: %s (attempt=%d/%d) sleeping=%.1fs",
                type(exc).__name__,
                exc,
                attempt + 1,
                attempts,
                delay,
            )
            await sleep(delay)
    raise AssertionError("unreachable")


__all__ = ["TRANSIENT_STATUS_CODES", "backoff_delay", "is_transient", "retry_async"]
