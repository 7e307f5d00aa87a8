from .retry import RetryExhaustedError, retry_async  # noqa: F401

__all__ = ["RetryExhaustedError", "retry_async"]
