"""Retry utilities for asynchronous operations using Tenacity."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..errors.handling import is_retryable_error
from ..errors.internal import NetworkError

T = TypeVar("T")


class RetryExhaustedError(NetworkError):
    """Exception raised when all retry attempts have been exhausted."""

    def __init__(self, message: str, attempts: int, final_exception: BaseException | None = None) -> None:
        super().__init__(message, data={"attempts": attempts})
        self.attempts = attempts
        self.final_exception = final_exception


async def retry_async(
    operation: Callable[[int], Awaitable[T]],
    *,
    max_attempts: int = 5,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    should_retry: Callable[[BaseException], bool] = is_retryable_error,
    on_failure: Callable[[int, BaseException], None] | None = None,
) -> T:
    """Retry an asynchronous operation with exponential backoff using Tenacity.

    Args:
        operation: Async callable taking the 1-based attempt number.
        max_attempts: Maximum number of attempts.
        base_delay: Backoff multiplier in seconds; 0 disables waiting.
        max_delay: Upper bound of a single wait.
        should_retry: Decides whether a failure earns another attempt;
            defaults to ``is_retryable_error`` (transport failures).
            Anything else propagates immediately.
        on_failure: Called with (attempt, exception) after each failed attempt.

    Returns:
        The result of the first successful attempt.

    Raises:
        RetryExhaustedError: If all attempts are exhausted.
    """
    attempt_count = 0

    def before_attempt(retry_state):
        nonlocal attempt_count
        attempt_count = retry_state.attempt_number

    def after_attempt(retry_state):
        if on_failure is not None and retry_state.outcome.failed:
            on_failure(retry_state.attempt_number, retry_state.outcome.exception())

    async def wrapped_operation() -> T:
        return await operation(attempt_count)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, max=max_delay),
        retry=retry_if_exception(should_retry),
        before=before_attempt,
        after=after_attempt,
    )

    try:
        return await retrying(wrapped_operation)
    except RetryError as e:
        final = e.last_attempt.exception()
        raise RetryExhaustedError(
            f"Operation failed after {max_attempts} attempts",
            attempts=max_attempts,
            final_exception=final,
        ) from final
