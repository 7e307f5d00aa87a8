from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    EncodingError,
    InternalError,
    NetworkError,
    ParsingError,
)


def classify_error(error: Exception) -> str:
    """Map an exception onto the error category used for aggregation."""
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, EncodingError):
        return "encoding"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized by its class and reported through structured
    logging so repeated failures are aggregated per category.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging. The
            exception's own ``data`` mapping is merged in when present.
    """
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )


def is_retryable_error(error: Exception) -> bool:
    """Default retry predicate of ``retry_async``: transport failures only."""
    return isinstance(error, NetworkError | OSError | ConnectionError | TimeoutError)
