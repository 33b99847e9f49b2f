"""Retry logic for outbound HTTP calls using tenacity."""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

F = TypeVar("F", bound=Callable[..., Any])

RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    httpx.TransportError,
    TimeoutError,
    ConnectionError,
)


def with_http_retry(
    name: str,
    max_retries: int = 3,
    base_delay: float = 1.0,
) -> Callable[[F], F]:
    """Decorator to retry an async HTTP call on transport failures.

    The call is attempted at most ``max_retries + 1`` times, sleeping
    ``base_delay * 2**attempt`` seconds between attempts. Errors that are not
    transport failures (bad status handling, decoding, programming errors)
    propagate on the first attempt.

    Args:
        name: Name of the upstream for log messages
        max_retries: Number of retries after the first attempt
        base_delay: Delay before the first retry, in seconds

    Returns:
        Decorated function with retry logic

    """

    def log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else "Unknown error"
        logger.warning(f"{name} attempt {retry_state.attempt_number} failed: {error}")

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            retrying = AsyncRetrying(
                retry=retry_if_exception_type(RETRYABLE_ERRORS),
                stop=stop_after_attempt(max_retries + 1),
                wait=wait_exponential(multiplier=base_delay, exp_base=2, min=0),
                before_sleep=log_retry,
                reraise=True,
            )
            async for attempt in retrying:
                with attempt:
                    return await func(*args, **kwargs)
            return None  # pragma: no cover - AsyncRetrying always returns or raises

        return wrapper  # type: ignore[return-value]

    return decorator
