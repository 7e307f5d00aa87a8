"""Event logging: the ``IRCLogger`` and its template catalog."""

from .event_catalog import EVENT_TEMPLATES, reload_event_templates, template_for  # noqa: F401
from .logger import IRCLogger, logger  # noqa: F401

__all__ = ["EVENT_TEMPLATES", "IRCLogger", "logger", "reload_event_templates", "template_for"]
