"""Catalogued event logging.

Every log line in the library is an event named ``domain_action``. The
text comes from the event catalog, formatted with the event's keyword
context; ``server`` and ``user`` are lifted into a fixed-width column so
lines from one connection line up::

    [tester@irc.example.net ] Connected to irc.example.net:6667

With ``DEBUG`` set in the environment the event name and the full context
are included as well.
"""

from __future__ import annotations

import logging
import os

from .event_catalog import template_for

_PREFIX_WIDTH = 24
_EVENT_WIDTH = 32
_MAX_VALUE_REPR = 120


def _debug_format_enabled() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


def _short_repr(value: object) -> str:
    text = repr(value)
    if len(text) > _MAX_VALUE_REPR:
        return text[: _MAX_VALUE_REPR - 1] + "…"
    return text


class IRCLogger:
    """Wraps one stdlib logger and renders catalogued events onto it."""

    def __init__(self, name: str = "ircwire") -> None:
        self.logger = logging.getLogger(name)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **context: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        text, derived = self._render(domain, action, human, context)
        if derived:
            context["derived"] = True
        user = context.pop("user", None)
        server = context.pop("server", None)
        column = self._column(user, server)
        event = f"{domain}_{action}".lower()
        if _debug_format_enabled():
            line = self._debug_line(event, column, text, context)
        else:
            line = f"{column} {text}"
        self.logger.log(level, line, exc_info=exc_info, stacklevel=2)

    @staticmethod
    def _render(
        domain: str, action: str, human: str | None, context: dict[str, object]
    ) -> tuple[str, bool]:
        if human is not None:
            return human, False
        template = template_for(domain, action)
        if template is None:
            return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}", True
        try:
            return template.format(**context), False
        except (KeyError, IndexError, ValueError):
            return template, False

    @staticmethod
    def _column(user: object, server: object) -> str:
        has_user = isinstance(user, str) and bool(user)
        if isinstance(server, str) and server:
            label = f"{user}@{server}" if has_user else server
        else:
            label = user if has_user else "system"
        return f"[{label.ljust(_PREFIX_WIDTH)[:_PREFIX_WIDTH]}]"

    @staticmethod
    def _debug_line(
        event: str, column: str, text: str, context: dict[str, object]
    ) -> str:
        if len(event) > _EVENT_WIDTH:
            event = event[: _EVENT_WIDTH - 1] + "…"
        line = f"{event.ljust(_EVENT_WIDTH)} {column} {text}"
        if context:
            details = ", ".join(f"{k}={_short_repr(v)}" for k, v in context.items())
            line = f"{line} ({details})"
        return line


logger = IRCLogger()
