import logging

import pytest

from ircwire.errors import (
    ConfigError,
    ConnectionClosedError,
    EncodingError,
    InternalError,
    NetworkError,
    ParsingError,
    classify_error,
    is_retryable_error,
    log_error,
)
from ircwire.irc.parser import MessageParseError, ParseErrorKind
from ircwire.logging_config import error_aggregator


@pytest.mark.parametrize(
    "error, category",
    [
        (NetworkError("x"), "network"),
        (ConnectionClosedError("x"), "network"),
        (ConnectionResetError(), "network"),
        (MessageParseError(ParseErrorKind.GRAMMAR_MISMATCH, "x", "why"), "parsing"),
        (EncodingError("x"), "encoding"),
        (ConfigError("x"), "config"),
        (InternalError("x"), "internal"),
        (RuntimeError("x"), "unknown"),
    ],
)
def test_classify_error(error, category):
    assert classify_error(error) == category


def test_error_data_is_copied():
    data = {"host": "a"}
    err = NetworkError("boom", data=data)
    data["host"] = "b"
    assert err.data == {"host": "a"}
    assert InternalError("plain").data == {}


def test_log_error_merges_error_data(caplog):
    caplog.set_level(logging.ERROR)
    log_error("Connect failed", NetworkError("refused", data={"port": 6667}), {"host": "h"})
    message = caplog.records[-1].getMessage()
    assert message.startswith("[NETWORK] Connect failed: refused")
    assert "port=6667" in message
    assert "host=h" in message
    assert error_aggregator.get_error_summary()["network"]["total_count"] == 1


def test_is_retryable_error():
    assert is_retryable_error(NetworkError("x"))
    assert is_retryable_error(TimeoutError())
    assert not is_retryable_error(ConfigError("x"))
