"""Read loop extracted from the client for clarity & testability."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors.internal import ConnectionClosedError, NetworkError
from ..logs.logger import logger
from .parser import MessageParseError

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient
    from .dispatcher import IRCDispatcher


class IRCListener:
    """Owns the read loop: read one line, parse it, dispatch it, repeat.

    Each message is fully handled before the next line is read. Lines that
    fail to parse are logged and skipped. The loop ends when the transport
    fails or ``stop()`` was requested; the disconnect hook runs either way.
    """

    def __init__(self, client: IRCClient):
        self.client = client
        self.running = False

    def stop(self) -> None:
        """Leave the loop after the message currently being handled."""
        self.running = False

    async def listen(self, dispatcher: IRCDispatcher) -> NetworkError | None:
        """Run until the connection ends.

        Returns:
            The transport error that ended the loop, or ``None`` after
            ``stop()``. Exceptions raised by handlers propagate.
        """
        server = self.client.config.server
        self.running = True
        error: NetworkError | None = None
        logger.log_event("irc", "listener_start", server=server)
        try:
            await dispatcher.client_connected()
            while self.running:
                try:
                    message = await self.client.read()
                except MessageParseError as e:
                    logger.log_event(
                        "irc",
                        "parse_failed",
                        level=logging.WARNING,
                        server=server,
                        kind=e.kind.name,
                        reason=e.reason,
                    )
                    continue
                await dispatcher.dispatch(message)
        except ConnectionClosedError as e:
            logger.log_event("irc", "connection_lost", level=logging.WARNING, server=server)
            error = e
        except NetworkError as e:
            logger.log_event(
                "irc", "connection_error", level=logging.ERROR, server=server, error=str(e)
            )
            error = e
        finally:
            self.running = False
            logger.log_event("irc", "listener_stopped", level=logging.WARNING, server=server)
            await dispatcher.client_disconnected()
        return error
