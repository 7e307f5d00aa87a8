"""
Tunable constants for the ircwire client.

Each constant can be overridden by setting an environment variable with the
same name. Protocol constants that are fixed by the wire format live in
``ircwire.irc.constants`` instead.
"""

import logging
import os

_log = logging.getLogger(__name__)


def _env_value(name: str, default, convert):
    """Read ``name`` from the environment and convert it.

    An unset variable yields ``default``; a value that does not convert is
    reported and also yields ``default``.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return convert(raw)
    except ValueError:
        _log.warning("Ignoring %s=%r, expected %s; using %r", name, raw, convert.__name__, default)
        return default


def _get_env_int(name: str, default: int) -> int:
    return _env_value(name, default, int)


def _get_env_float(name: str, default: float) -> float:
    return _env_value(name, default, float)


# Connection
IRC_DEFAULT_PORT = _get_env_int("IRC_DEFAULT_PORT", 6667)
IRC_CONNECT_TIMEOUT = _get_env_float("IRC_CONNECT_TIMEOUT", 10.0)  # seconds per attempt
IRC_CONNECT_MAX_ATTEMPTS = _get_env_int("IRC_CONNECT_MAX_ATTEMPTS", 5)

# Backoff between connect attempts: base * 2**n seconds, capped at the max
IRC_RETRY_BASE_DELAY = _get_env_float("IRC_RETRY_BASE_DELAY", 1.0)
IRC_RETRY_MAX_DELAY = _get_env_float("IRC_RETRY_MAX_DELAY", 60.0)

# Stream reader buffer limit; lines longer than this are discarded unread.
IRC_READ_LIMIT = _get_env_int("IRC_READ_LIMIT", 8192)

# Configuration
IRC_CONF_FILE = os.getenv("IRC_CONF_FILE", "ircwire.conf")
