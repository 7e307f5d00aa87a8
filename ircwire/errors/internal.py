"""Centralized internal error hierarchy.

These exceptions give the library semantic error categories. Raise them at
the codec, transport and configuration boundaries; never surface raw
``OSError`` / JSON / pydantic errors to callers, wrap them instead.

Classes:
  InternalError          – Base for all internal errors.
  NetworkError           – Transport level failures (connect, read, write).
  ConnectionClosedError  – The peer closed the connection.
  ParsingError           – Wire text that does not form a valid message.
  EncodingError          – A message that cannot be put on the wire.
  ConfigError            – Missing or invalid client configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Connection refusals, resets and timeouts are wrapped in this class. The
    connect path retries on it; the read loop terminates on it.
    """


class ConnectionClosedError(NetworkError):
    """Raised when the remote peer closes the connection."""


class ParsingError(InternalError):
    """Exception raised when wire text does not form a valid message."""


class EncodingError(InternalError):
    """Exception raised when a message cannot be encoded for the wire.

    The only cause today is an encoded line exceeding the protocol's
    maximum line length; lines are rejected, never truncated.
    """


class ConfigError(InternalError):
    """Exception raised for a missing, unreadable or invalid configuration."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ConnectionClosedError",
    "ParsingError",
    "EncodingError",
    "ConfigError",
]
