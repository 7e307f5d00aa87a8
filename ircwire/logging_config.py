"""
Logging setup for ircwire.

``LoggerConfigurator`` installs a colorlog handler on the root logger.
``log_structured_error`` reports categorized failures and feeds the
process-wide ``error_aggregator`` so a summary can be printed at exit.
"""

from __future__ import annotations

import atexit
import logging
import os
import sys
import threading
import time
from collections import Counter, deque
from collections.abc import Mapping
from typing import Any

import colorlog

_error_log = logging.getLogger("ircwire.errors")

_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}
_RECENT_WINDOW = 3600.0


class ErrorAggregator:
    """Counts failures per category over the lifetime of a client.

    Only the newest ``max_per_type`` occurrences of each category are kept.
    Occurrences carrying a ``server`` in their context are also counted per
    server, which is what the exit summary reports for connection trouble.
    """

    def __init__(self, max_per_type: int = 1000, alert_rate: float = 10.0):
        self.max_per_type = max_per_type
        self.alert_rate = alert_rate
        self.lock = threading.Lock()
        self.errors: dict[str, deque[dict[str, Any]]] = {}
        self.per_server: Counter[str] = Counter()
        self.start_time = time.time()

    def record_error(
        self, error_type: str, message: str, context: Mapping[str, Any] | None = None
    ) -> None:
        entry = {"timestamp": time.time(), "message": message, "context": dict(context or {})}
        with self.lock:
            bucket = self.errors.get(error_type)
            if bucket is None:
                bucket = self.errors[error_type] = deque(maxlen=self.max_per_type)
            bucket.append(entry)
            server = entry["context"].get("server")
            if isinstance(server, str):
                self.per_server[server] += 1

    def get_error_summary(self) -> dict[str, Any]:
        now = time.time()
        with self.lock:
            hours = max((now - self.start_time) / 3600, 1)
            return {
                error_type: {
                    "total_count": len(bucket),
                    "recent_count": sum(
                        1 for e in bucket if now - e["timestamp"] < _RECENT_WINDOW
                    ),
                    "rate_per_hour": len(bucket) / hours,
                    "last_occurrence": bucket[-1] if bucket else None,
                }
                for error_type, bucket in self.errors.items()
            }

    def should_alert(self, error_type: str, threshold_rate: float | None = None) -> bool:
        """Whether ``error_type`` is occurring faster than the alert rate."""
        stats = self.get_error_summary().get(error_type)
        if stats is None:
            return False
        limit = self.alert_rate if threshold_rate is None else threshold_rate
        return stats["rate_per_hour"] > limit

    def reset(self) -> None:
        with self.lock:
            self.errors.clear()
            self.per_server.clear()
            self.start_time = time.time()

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            _error_log.info("No errors recorded in current session")
            return
        _error_log.warning("Error summary for this session")
        for error_type, stats in sorted(summary.items()):
            _error_log.warning(
                "  %s: %d total, %d in last hour, %.1f/hour",
                error_type,
                stats["total_count"],
                stats["recent_count"],
                stats["rate_per_hour"],
            )
            if stats["last_occurrence"]:
                _error_log.warning("    last: %s", stats["last_occurrence"]["message"])
        for server, count in self.per_server.most_common():
            _error_log.warning("  server %s: %d errors", server, count)


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log a categorized error and record it in ``error_aggregator``.

    The rendered line reads ``[CATEGORY] message | Exception: ... |
    Context: k=v | ...``. A CRITICAL alert follows when the category's
    rate crosses the aggregator threshold.
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    _error_log.log(level, " | ".join(parts))

    error_aggregator.record_error(error_type, message, context)
    if error_aggregator.should_alert(error_type):
        rate = error_aggregator.get_error_summary()[error_type]["rate_per_hour"]
        _error_log.critical("High error rate: %s at %.1f/hour", error_type, rate)


class LoggerConfigurator:
    """Installs colored console logging.

    ``config`` may be a ``ClientConfig`` or a plain mapping; a truthy
    ``debug`` forces DEBUG level. Otherwise the ``DEBUG`` environment
    variable decides between DEBUG and INFO.
    """

    def __init__(self, config: Any = None, stream=None):
        self.config = config
        self.stream = stream or sys.stderr

    def _config_debug(self) -> bool:
        if self.config is None:
            return False
        if isinstance(self.config, Mapping):
            return bool(self.config.get("debug"))
        return bool(getattr(self.config, "debug", False))

    def _resolve_level(self) -> int:
        if self._config_debug():
            return logging.DEBUG
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors=_LOG_COLORS,
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
            reset=True,
        )

    def configure(self) -> colorlog.ColoredFormatter:
        """Replace root handlers with one colored stream handler."""
        level = self._resolve_level()
        formatter = self.build_formatter()
        handler = colorlog.StreamHandler(self.stream)
        handler.setFormatter(formatter)

        root = logging.getLogger()
        for existing in list(root.handlers):
            root.removeHandler(existing)
        root.addHandler(handler)
        root.setLevel(level)

        atexit.register(error_aggregator.log_summary_report)
        return formatter
