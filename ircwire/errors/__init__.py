"""Error hierarchy and error reporting helpers."""

from .handling import classify_error, is_retryable_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    ConnectionClosedError,
    EncodingError,
    InternalError,
    NetworkError,
    ParsingError,
)

__all__ = [
    "ConfigError",
    "ConnectionClosedError",
    "EncodingError",
    "InternalError",
    "NetworkError",
    "ParsingError",
    "classify_error",
    "is_retryable_error",
    "log_error",
]
