"""TCP transport for one IRC connection."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum, auto

from ..constants import (
    IRC_CONNECT_MAX_ATTEMPTS,
    IRC_CONNECT_TIMEOUT,
    IRC_READ_LIMIT,
    IRC_RETRY_BASE_DELAY,
    IRC_RETRY_MAX_DELAY,
)
from ..errors.internal import ConnectionClosedError, NetworkError
from ..logs.logger import logger
from ..utils.retry import retry_async


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    CLOSED = auto()


class IRCConnection:
    """Line oriented byte transport over asyncio streams.

    Provides the two halves the protocol layer consumes: ``next_line()``
    returning one CRLF-terminated line as bytes, and ``write()`` /
    ``flush()`` for outgoing data.
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        connect_timeout: float = IRC_CONNECT_TIMEOUT,
        max_attempts: int = IRC_CONNECT_MAX_ATTEMPTS,
        retry_base_delay: float = IRC_RETRY_BASE_DELAY,
        retry_max_delay: float = IRC_RETRY_MAX_DELAY,
        read_limit: int = IRC_READ_LIMIT,
    ) -> None:
        self.host = host
        self.port = port
        self.connect_timeout = connect_timeout
        self.max_attempts = max_attempts
        self.retry_base_delay = retry_base_delay
        self.retry_max_delay = retry_max_delay
        self.read_limit = read_limit
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.state = ConnectionState.DISCONNECTED

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                server=self.host,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    @property
    def is_open(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def attach(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        """Use already opened streams instead of dialing out."""
        self.reader = reader
        self.writer = writer
        self._set_state(ConnectionState.CONNECTED)

    async def open(self) -> None:
        """Connect, retrying transport failures with exponential backoff.

        Raises:
            RetryExhaustedError: every attempt failed.
        """
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event("irc", "connect_start", host=self.host, port=self.port)

        async def attempt(_number: int) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
            try:
                return await asyncio.wait_for(
                    asyncio.open_connection(self.host, self.port, limit=self.read_limit),
                    timeout=self.connect_timeout,
                )
            except (OSError, TimeoutError) as e:
                raise NetworkError(
                    f"connect to {self.host}:{self.port} failed: {e}",
                    data={"host": self.host, "port": self.port},
                ) from e

        def report(number: int, error: BaseException) -> None:
            logger.log_event(
                "irc",
                "connect_attempt_failed",
                level=logging.WARNING,
                attempt=number,
                error=str(error),
            )

        try:
            reader, writer = await retry_async(
                attempt,
                max_attempts=self.max_attempts,
                base_delay=self.retry_base_delay,
                max_delay=self.retry_max_delay,
                on_failure=report,
            )
        except NetworkError:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.log_event(
                "irc", "connect_failed", level=logging.ERROR, host=self.host, port=self.port
            )
            raise
        self.attach(reader, writer)
        logger.log_event("irc", "connect_success", host=self.host, port=self.port)

    @property
    def local_address(self) -> str | None:
        if self.writer is None:
            return None
        sockname = self.writer.get_extra_info("sockname")
        if not sockname:
            return None
        return str(sockname[0])

    async def next_line(self) -> bytes:
        """Return the next line, line terminator included.

        A line longer than ``read_limit`` is discarded in full, up to and
        including its newline, and the following line is returned instead.

        Raises:
            ConnectionClosedError: the peer closed the stream.
            NetworkError: the read failed.
        """
        if self.reader is None:
            raise NetworkError("connection is not open")
        try:
            while True:
                try:
                    return await self.reader.readuntil(b"\n")
                except asyncio.LimitOverrunError as e:
                    logger.log_event("irc", "line_too_long", level=logging.WARNING)
                    await self._discard_line(e.consumed)
        except asyncio.IncompleteReadError as e:
            # EOF, possibly in the middle of a line; the fragment is dropped.
            raise ConnectionClosedError("connection closed by peer") from e
        except OSError as e:
            raise NetworkError(f"read failed: {e}") from e

    async def _discard_line(self, consumed: int) -> None:
        # ``consumed`` bytes are buffered and belong to the overlong line.
        while True:
            await self.reader.readexactly(consumed)
            try:
                await self.reader.readuntil(b"\n")
                return
            except asyncio.LimitOverrunError as e:
                consumed = e.consumed

    def write(self, data: bytes) -> None:
        if self.writer is None:
            raise NetworkError("connection is not open")
        self.writer.write(data)

    async def flush(self) -> None:
        if self.writer is None:
            raise NetworkError("connection is not open")
        try:
            await self.writer.drain()
        except OSError as e:
            raise NetworkError(f"write failed: {e}") from e

    async def close(self) -> None:
        writer = self.writer
        self.writer = None
        self.reader = None
        if writer is not None:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as e:
                logger.log_event(
                    "irc", "connection_error", level=logging.DEBUG, error=str(e)
                )
        self._set_state(ConnectionState.CLOSED)
