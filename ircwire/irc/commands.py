"""Outbound command helpers.

Each helper builds one message and hands it to ``write``. ``None``
arguments are omitted from the parameter list, so optional trailing
parameters simply disappear.
"""

from __future__ import annotations

from collections.abc import Sequence

from .constants import Command
from .parser import IRCMessage, join_list, make_message


class OutboundCommands:
    """Mixin providing one coroutine per protocol verb."""

    async def write(self, message: IRCMessage) -> None:  # pragma: no cover
        raise NotImplementedError

    async def send(self, command: Command, *params: str | None) -> None:
        await self.write(make_message(command, *params))

    # Connection registration

    async def pass_(self, password: str) -> None:
        await self.send(Command.PASS, password)

    async def nick(self, nickname: str) -> None:
        await self.send(Command.NICK, nickname)

    async def user(self, username: str, hostname: str, servername: str, realname: str) -> None:
        await self.send(Command.USER, username, hostname, servername, realname)

    async def oper(self, user: str, password: str) -> None:
        await self.send(Command.OPER, user, password)

    async def quit(self, message: str | None = None) -> None:
        await self.send(Command.QUIT, message)

    # Channel operations

    async def join(self, channels: Sequence[str], keys: Sequence[str] = ()) -> None:
        await self.send(Command.JOIN, join_list(channels), join_list(keys) if keys else None)

    async def part(self, channels: Sequence[str]) -> None:
        await self.send(Command.PART, join_list(channels))

    async def channel_mode(self, channel: str, modes: str, params: Sequence[str] = ()) -> None:
        await self.send(Command.MODE, channel, modes, *params)

    async def user_mode(self, nickname: str, modes: str) -> None:
        await self.send(Command.MODE, nickname, modes)

    async def topic(self, channel: str, topic: str | None = None) -> None:
        await self.send(Command.TOPIC, channel, topic)

    async def names(self, channels: Sequence[str] = ()) -> None:
        await self.send(Command.NAMES, join_list(channels) if channels else None)

    async def list(self, channels: Sequence[str] = (), server: str | None = None) -> None:
        # A server target is only meaningful after a channel list.
        await self.send(
            Command.LIST,
            join_list(channels) if channels else None,
            server if channels else None,
        )

    async def invite(self, nickname: str, channel: str) -> None:
        await self.send(Command.INVITE, nickname, channel)

    async def kick(self, channel: str, user: str, comment: str | None = None) -> None:
        await self.send(Command.KICK, channel, user, comment)

    # Server queries

    async def version(self, server: str | None = None) -> None:
        await self.send(Command.VERSION, server)

    async def stats(self, query: str | None = None, server: str | None = None) -> None:
        await self.send(Command.STATS, query, server if query else None)

    async def links(self, remote_server: str | None = None, server_mask: str | None = None) -> None:
        await self.send(Command.LINKS, remote_server if server_mask else None, server_mask)

    async def time(self, server: str | None = None) -> None:
        await self.send(Command.TIME, server)

    async def server_connect(
        self, target_server: str, port: int | None = None, remote_server: str | None = None
    ) -> None:
        """Send CONNECT, asking a server to link to ``target_server``."""
        await self.send(
            Command.CONNECT,
            target_server,
            str(port) if port is not None else None,
            remote_server if port is not None else None,
        )

    async def trace(self, server: str | None = None) -> None:
        await self.send(Command.TRACE, server)

    async def admin(self, server: str | None = None) -> None:
        await self.send(Command.ADMIN, server)

    async def info(self, server: str | None = None) -> None:
        await self.send(Command.INFO, server)

    # Messaging

    async def privmsg(self, receivers: Sequence[str], text: str) -> None:
        await self.send(Command.PRIVMSG, join_list(receivers), text)

    async def notice(self, nickname: str, text: str) -> None:
        await self.send(Command.NOTICE, nickname, text)

    # User queries

    async def who(self, name: str, operators_only: bool = False) -> None:
        await self.send(Command.WHO, name, "o" if operators_only else None)

    async def whois(self, nickmasks: Sequence[str], server: str | None = None) -> None:
        await self.send(Command.WHOIS, server, join_list(nickmasks))

    async def whowas(self, nickname: str, count: int | None = None, server: str | None = None) -> None:
        await self.send(
            Command.WHOWAS,
            nickname,
            str(count) if count is not None else None,
            server if count is not None else None,
        )

    # Miscellaneous

    async def kill(self, nickname: str, comment: str) -> None:
        await self.send(Command.KILL, nickname, comment)

    async def ping(self, server1: str, server2: str | None = None) -> None:
        await self.send(Command.PING, server1, server2)

    async def pong(self, daemon1: str, daemon2: str | None = None) -> None:
        await self.send(Command.PONG, daemon1, daemon2)

    async def away(self, message: str | None = None) -> None:
        await self.send(Command.AWAY, message)

    async def rehash(self) -> None:
        await self.send(Command.REHASH)

    async def restart(self) -> None:
        await self.send(Command.RESTART)

    async def summon(self, user: str, server: str | None = None) -> None:
        await self.send(Command.SUMMON, user, server)

    async def users(self, server: str | None = None) -> None:
        await self.send(Command.USERS, server)

    async def wallops(self, text: str) -> None:
        await self.send(Command.WALLOPS, text)

    async def userhost(self, nicknames: Sequence[str]) -> None:
        await self.send(Command.USERHOST, *nicknames)

    async def ison(self, nicknames: Sequence[str]) -> None:
        await self.send(Command.ISON, *nicknames)
