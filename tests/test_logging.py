import logging

import pytest

from ircwire.logging_config import (
    ErrorAggregator,
    LoggerConfigurator,
    error_aggregator,
    log_structured_error,
)
from ircwire.logs import EVENT_TEMPLATES, IRCLogger, reload_event_templates


def test_catalog_contains_irc_events():
    assert EVENT_TEMPLATES[("irc", "raw_out")] == "W {line}"
    assert ("app", "config_loaded") in EVENT_TEMPLATES


def test_template_is_formatted_with_prefix(caplog, monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    log = IRCLogger("ircwire.test")
    caplog.set_level(logging.INFO, logger="ircwire.test")
    log.log_event("irc", "connect_success", host="irc.example.net", port=6667, user="bot")
    (record,) = caplog.records
    assert record.getMessage().startswith("[bot")
    assert "Connected to irc.example.net:6667" in record.getMessage()


def test_unknown_event_falls_back_to_derived_text(caplog, monkeypatch):
    monkeypatch.setenv("DEBUG", "1")
    log = IRCLogger("ircwire.test")
    caplog.set_level(logging.DEBUG, logger="ircwire.test")
    log.log_event("irc", "made_up_event", level=logging.DEBUG, detail=3)
    message = caplog.records[0].getMessage()
    assert message.startswith("irc_made_up_event")
    assert "irc: made up event" in message
    assert "detail=3" in message
    assert "derived=True" in message


def test_missing_template_argument_keeps_raw_template(caplog):
    log = IRCLogger("ircwire.test")
    caplog.set_level(logging.INFO, logger="ircwire.test")
    log.log_event("irc", "connect_success")
    assert "Connected to {host}:{port}" in caplog.records[0].getMessage()


def test_disabled_level_is_skipped(caplog):
    log = IRCLogger("ircwire.test")
    caplog.set_level(logging.WARNING, logger="ircwire.test")
    log.log_event("irc", "raw_in", level=logging.DEBUG, line="PING x")
    assert caplog.records == []


def test_reload_with_missing_file_keeps_logger_working(tmp_path):
    try:
        reload_event_templates(tmp_path / "nope.json")
        assert EVENT_TEMPLATES == {("app", "load_error"): "Event templates file missing"}
    finally:
        reload_event_templates()
    assert ("irc", "raw_in") in EVENT_TEMPLATES


def test_error_aggregator_summary_and_reset():
    agg = ErrorAggregator(max_per_type=2)
    for i in range(3):
        agg.record_error("network", f"fail {i}")
    summary = agg.get_error_summary()
    assert summary["network"]["total_count"] == 2
    assert summary["network"]["last_occurrence"]["message"] == "fail 2"
    assert not agg.should_alert("network")
    assert not agg.should_alert("parsing")
    agg.reset()
    assert agg.get_error_summary() == {}


def test_log_structured_error_records_and_logs(caplog):
    caplog.set_level(logging.ERROR)
    log_structured_error(
        "parsing", "bad line", exception=ValueError("x"), context={"line": "FOO"}
    )
    message = caplog.records[-1].getMessage()
    assert message.startswith("[PARSING] bad line")
    assert "ValueError: x" in message
    assert "line=FOO" in message
    assert error_aggregator.get_error_summary()["parsing"]["total_count"] == 1


@pytest.mark.parametrize(
    "config, env, expected",
    [
        ({"debug": True}, None, logging.DEBUG),
        (None, "yes", logging.DEBUG),
        (None, None, logging.INFO),
    ],
)
def test_configurator_level(monkeypatch, config, env, expected):
    if env is None:
        monkeypatch.delenv("DEBUG", raising=False)
    else:
        monkeypatch.setenv("DEBUG", env)
    assert LoggerConfigurator(config)._resolve_level() == expected
