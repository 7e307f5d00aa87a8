import os

# Set test-friendly defaults for constants that affect test performance.
# Must run before ircwire.constants is imported.
os.environ.setdefault("IRC_RETRY_BASE_DELAY", "0")
os.environ.setdefault("IRC_CONNECT_TIMEOUT", "1")

import pytest  # noqa: E402

from ircwire.config.model import ClientConfig  # noqa: E402
from ircwire.errors.internal import ConnectionClosedError, NetworkError  # noqa: E402
from ircwire.irc.client import IRCClient  # noqa: E402


class FakeConnection:
    """In-memory stand-in for IRCConnection.

    ``lines`` are served in order by ``next_line``; once exhausted the
    connection reports the peer closed it (or raises ``fail_with``).
    """

    def __init__(self, lines=(), local_address="10.0.0.5", fail_with=None):
        self.lines = [
            line if isinstance(line, bytes) else line.encode("utf-8") for line in lines
        ]
        self.written: list[bytes] = []
        self.pending: list[bytes] = []
        self.local_address = local_address
        self.fail_with = fail_with
        self.is_open = True
        self.closed = False
        self.reads = 0

    async def open(self):
        self.is_open = True

    async def next_line(self) -> bytes:
        self.reads += 1
        if self.lines:
            return self.lines.pop(0)
        if self.fail_with is not None:
            raise self.fail_with
        raise ConnectionClosedError("connection closed by peer")

    def write(self, data: bytes) -> None:
        if not self.is_open:
            raise NetworkError("connection is not open")
        self.pending.append(data)

    async def flush(self) -> None:
        self.written.extend(self.pending)
        self.pending.clear()

    async def close(self) -> None:
        self.is_open = False
        self.closed = True

    @property
    def sent(self) -> list[str]:
        return [b.decode("utf-8") for b in self.written]


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(nick="tester", server="irc.example.net")


@pytest.fixture
def fake_connection():
    return FakeConnection


@pytest.fixture
def make_client(config):
    def _make(lines=(), **kwargs) -> IRCClient:
        return IRCClient(config, connection=FakeConnection(lines, **kwargs))

    return _make
