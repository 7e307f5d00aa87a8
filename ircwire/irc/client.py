"""IRC client: owns a connection, writes messages and runs the read loop."""

from __future__ import annotations

import logging

from ..config.model import ClientConfig
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .callbacks import ClientCallbacks
from .commands import OutboundCommands
from .connection import IRCConnection
from .dispatcher import IRCDispatcher
from .listener import IRCListener
from .parser import IRCMessage, encode_irc_message, parse_irc_message


class IRCClient(OutboundCommands):
    """A single client connection to an IRC server.

    Typical use::

        client = IRCClient(config)
        await client.connect()
        error = await client.run(MyCallbacks())

    ``run`` returns once the connection ends, handing back the transport
    error that stopped it.
    """

    def __init__(
        self, config: ClientConfig, connection: IRCConnection | None = None
    ) -> None:
        self.config = config
        self.connection = connection or IRCConnection(
            config.server,
            config.port,
            connect_timeout=config.connect_timeout,
            max_attempts=config.max_connect_attempts,
        )
        self.listener = IRCListener(self)
        self.dispatcher: IRCDispatcher | None = None

    def _raw_level(self) -> int:
        return logging.INFO if self.config.debug else logging.DEBUG

    async def connect(self) -> None:
        await self.connection.open()

    async def write(self, message: IRCMessage) -> None:
        """Encode ``message`` and flush it to the server.

        Raises:
            EncodingError: the message does not fit in one protocol line.
            NetworkError: the transport is closed or the write failed.
        """
        data = encode_irc_message(message)
        self.connection.write(data)
        await self.connection.flush()
        logger.log_event(
            "irc",
            "raw_out",
            level=self._raw_level(),
            server=self.config.server,
            line=data.decode("utf-8", errors="replace").rstrip("\r\n"),
        )

    async def read(self) -> IRCMessage:
        """Read and parse the next line.

        Raises:
            MessageParseError: the line is not a valid message.
            NetworkError: the connection ended.
        """
        line = await self.connection.next_line()
        logger.log_event(
            "irc",
            "raw_in",
            level=self._raw_level(),
            server=self.config.server,
            line=line.decode("utf-8", errors="replace").rstrip("\r\n"),
        )
        return parse_irc_message(line)

    def announced_hostname(self) -> str:
        return self.config.hostname or self.connection.local_address or "localhost"

    async def register(self) -> None:
        """Send the PASS / NICK / USER registration sequence."""
        if self.config.password:
            await self.pass_(self.config.password)
        await self.nick(self.config.nick)
        await self.user(
            self.config.username or self.config.nick,
            self.announced_hostname(),
            self.config.server,
            self.config.realname or self.config.nick,
        )
        logger.log_event(
            "irc", "handshake_sent", server=self.config.server, nick=self.config.nick
        )

    async def run(self, callbacks: ClientCallbacks | None = None) -> NetworkError | None:
        """Dispatch incoming messages to ``callbacks`` until the connection ends."""
        self.dispatcher = IRCDispatcher(self, callbacks)
        return await self.listener.listen(self.dispatcher)

    async def disconnect(self, message: str | None = None) -> None:
        """Send QUIT when still connected, then close the transport."""
        if self.connection.is_open:
            try:
                await self.quit(message)
            except NetworkError as e:
                logger.log_event(
                    "irc", "connection_error", level=logging.DEBUG, error=str(e)
                )
        await self.connection.close()
        logger.log_event("irc", "disconnected", server=self.config.server)
