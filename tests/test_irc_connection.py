import asyncio
import logging

import pytest
import pytest_asyncio

from ircwire.errors import ConnectionClosedError, NetworkError
from ircwire.irc.connection import ConnectionState, IRCConnection
from ircwire.utils.retry import RetryExhaustedError


@pytest_asyncio.fixture
async def line_server():
    """Local TCP server sending scripted lines and collecting what it receives.

    A float in the script pauses the server for that many seconds.
    """
    received: list[bytes] = []
    script: list[bytes | float] = []

    async def handle(reader, writer):
        for chunk in script:
            if isinstance(chunk, float):
                await asyncio.sleep(chunk)
                continue
            writer.write(chunk)
            await writer.drain()
        received.append(await reader.readline())
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    yield port, script, received
    server.close()
    await server.wait_closed()


@pytest.mark.asyncio
async def test_open_read_write_close(line_server):
    port, script, received = line_server
    script.append(b"PING :one\r\nPING :two\r\n")
    conn = IRCConnection("127.0.0.1", port, max_attempts=1)
    await conn.open()
    assert conn.is_open
    assert conn.local_address == "127.0.0.1"
    assert await conn.next_line() == b"PING :one\r\n"
    assert await conn.next_line() == b"PING :two\r\n"
    conn.write(b"PONG one\r\n")
    await conn.flush()
    with pytest.raises(ConnectionClosedError):
        await conn.next_line()
    await conn.close()
    assert conn.state is ConnectionState.CLOSED
    assert received == [b"PONG one\r\n"]


@pytest.mark.asyncio
async def test_overlong_line_is_dropped(line_server, caplog):
    port, script, _ = line_server
    script.append(b"A" * 300 + b"\r\nPING :ok\r\n")
    conn = IRCConnection("127.0.0.1", port, max_attempts=1, read_limit=128)
    await conn.open()
    caplog.set_level(logging.WARNING, logger="ircwire")
    assert await conn.next_line() == b"PING :ok\r\n"
    assert any("read buffer" in r.getMessage() for r in caplog.records)
    await conn.close()


@pytest.mark.asyncio
async def test_overlong_line_split_across_writes_is_dropped_whole(line_server):
    port, script, _ = line_server
    script.extend(
        [
            b":srv PRIVMSG #c :" + b"A" * 300,
            0.05,
            b" QUIT :injected\r\nPING :ok\r\n",
        ]
    )
    conn = IRCConnection("127.0.0.1", port, max_attempts=1, read_limit=128)
    await conn.open()
    assert await conn.next_line() == b"PING :ok\r\n"
    await conn.close()


@pytest.mark.asyncio
async def test_partial_line_at_eof_reports_closed(line_server):
    port, script, _ = line_server
    script.append(b"PING :no-newline")
    conn = IRCConnection("127.0.0.1", port, max_attempts=1)
    await conn.open()
    conn.write(b"QUIT\r\n")
    await conn.flush()
    with pytest.raises(ConnectionClosedError):
        await conn.next_line()
    await conn.close()


@pytest.mark.asyncio
async def test_open_retries_then_gives_up(monkeypatch):
    attempts = []

    async def refuse(host, port, limit):
        attempts.append((host, port))
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(asyncio, "open_connection", refuse)
    conn = IRCConnection("irc.invalid", 6667, max_attempts=3, retry_base_delay=0)
    with pytest.raises(RetryExhaustedError) as info:
        await conn.open()
    assert len(attempts) == 3
    assert info.value.attempts == 3
    assert isinstance(info.value.final_exception, NetworkError)
    assert conn.state is ConnectionState.DISCONNECTED


@pytest.mark.asyncio
async def test_io_before_open_raises():
    conn = IRCConnection("irc.invalid", 6667)
    with pytest.raises(NetworkError):
        await conn.next_line()
    with pytest.raises(NetworkError):
        conn.write(b"x")
    assert conn.local_address is None
