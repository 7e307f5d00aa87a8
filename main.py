#!/usr/bin/env python3
"""
Main entry point for the ircwire example client
"""

import asyncio
import logging
import sys

from ircwire.config import load_config
from ircwire.errors import ConfigError, log_error
from ircwire.irc import ClientCallbacks, IRCClient
from ircwire.logging_config import LoggerConfigurator
from ircwire.logs import logger


class LoggingCallbacks(ClientCallbacks):
    """Default behaviour plus a log line for every received message."""

    def on_any_message(self, client, message):
        logger.log_event(
            "irc",
            "message",
            level=logging.DEBUG,
            server=client.config.server,
            line=" ".join((message.origin or "-", message.kind.token, *message.params)),
        )

    def on_err_nicknameinuse(self, client, message):
        return client.nick(client.config.nick + "_")


async def main(config_file=None):
    """Connect, register and run until the server closes the connection."""
    config = load_config(config_file)
    client = IRCClient(config)
    logger.log_event("app", "start")
    try:
        await client.connect()
        error = await client.run(LoggingCallbacks())
        if error is not None:
            log_error("Connection ended", error, {"server": config.server})
    finally:
        await client.disconnect()
        logger.log_event("app", "shutdown")


if __name__ == "__main__":
    LoggerConfigurator().configure()
    try:
        asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else None))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)
    except ConfigError as e:
        logger.log_event("app", "fatal_error", level=logging.CRITICAL, error=str(e))
        sys.exit(2)
    except Exception as e:
        log_error("Top-level error", e)
        logger.log_event(
            "app", "fatal_error", level=logging.CRITICAL, exc_info=True, error=str(e)
        )
        sys.exit(1)
