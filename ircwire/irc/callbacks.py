"""Overridable event callbacks.

Subclass ``ClientCallbacks`` and override the events you care about. Every
method may be a plain function or a coroutine; the dispatcher awaits
whatever a callback returns before reading the next line.

Named commands arrive destructured: ``on_privmsg(client, origin,
receivers, text)``. Numeric replies arrive as the raw message on a slot
named after the reply, ``on_rpl_welcome(client, message)`` or
``on_err_nicknameinuse(client, message)``; define only the ones you need,
the rest are no-ops.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient
    from .parser import IRCMessage


class ClientCallbacks:
    # Connection lifecycle

    def on_client_connect(self, client: IRCClient) -> Any:
        """Called once before the first read. Registers with the server."""
        return client.register()

    def on_client_disconnect(self, client: IRCClient) -> Any:
        """Called once after the read loop ends, cleanly or not."""

    # Meta events

    def on_any_message(self, client: IRCClient, message: IRCMessage) -> Any:
        """Called for every parsed message before it is classified."""

    def on_invalid_message(self, client: IRCClient, message: IRCMessage) -> Any:
        """A known command whose parameters do not fit its contract."""

    def on_unknown_command(self, client: IRCClient, message: IRCMessage) -> Any:
        pass

    def on_unknown_reply(self, client: IRCClient, message: IRCMessage) -> Any:
        pass

    # Connection registration

    def on_pass(self, client, origin: str | None, password: str) -> Any:
        pass

    def on_nick(
        self, client, origin: str | None, nickname: str, hopcount: int | None
    ) -> Any:
        pass

    def on_user(
        self,
        client,
        origin: str | None,
        username: str,
        hostname: str,
        servername: str,
        realname: str,
    ) -> Any:
        pass

    def on_server(
        self, client, origin: str | None, servername: str, hopcount: int, info: str
    ) -> Any:
        pass

    def on_oper(self, client, origin: str | None, user: str, password: str) -> Any:
        pass

    def on_quit(self, client, origin: str | None, message: str | None) -> Any:
        pass

    def on_squit(self, client, origin: str | None, server: str, comment: str) -> Any:
        pass

    # Channel operations

    def on_join(
        self, client, origin: str | None, channels: list[str], keys: list[str]
    ) -> Any:
        pass

    def on_part(self, client, origin: str | None, channels: list[str]) -> Any:
        pass

    def on_channel_mode(
        self,
        client,
        origin: str | None,
        channel: str,
        modes: str,
        params: list[str],
    ) -> Any:
        pass

    def on_user_mode(
        self, client, origin: str | None, nickname: str, modes: str
    ) -> Any:
        pass

    def on_topic(
        self, client, origin: str | None, channel: str, topic: str | None
    ) -> Any:
        pass

    def on_names(self, client, origin: str | None, channels: list[str]) -> Any:
        pass

    def on_list(
        self, client, origin: str | None, channels: list[str], server: str | None
    ) -> Any:
        pass

    def on_invite(
        self, client, origin: str | None, nickname: str, channel: str
    ) -> Any:
        pass

    def on_kick(
        self,
        client,
        origin: str | None,
        channel: str,
        user: str,
        comment: str | None,
    ) -> Any:
        pass

    # Server queries

    def on_version(self, client, origin: str | None, server: str | None) -> Any:
        pass

    def on_stats(
        self, client, origin: str | None, query: str | None, server: str | None
    ) -> Any:
        pass

    def on_links(
        self,
        client,
        origin: str | None,
        remote_server: str | None,
        server_mask: str | None,
    ) -> Any:
        pass

    def on_time(self, client, origin: str | None, server: str | None) -> Any:
        pass

    def on_connect(
        self,
        client,
        origin: str | None,
        target_server: str,
        port: int | None,
        remote_server: str | None,
    ) -> Any:
        pass

    def on_trace(self, client, origin: str | None, server: str | None) -> Any:
        pass

    def on_admin(self, client, origin: str | None, server: str | None) -> Any:
        pass

    def on_info(self, client, origin: str | None, server: str | None) -> Any:
        pass

    # Messaging

    def on_privmsg(
        self, client, origin: str | None, receivers: list[str], text: str
    ) -> Any:
        pass

    def on_notice(self, client, origin: str | None, nickname: str, text: str) -> Any:
        pass

    # User queries

    def on_who(
        self, client, origin: str | None, name: str, operators_only: bool
    ) -> Any:
        pass

    def on_whois(
        self, client, origin: str | None, server: str | None, nickmasks: list[str]
    ) -> Any:
        pass

    def on_whowas(
        self,
        client,
        origin: str | None,
        nickname: str,
        count: int | None,
        server: str | None,
    ) -> Any:
        pass

    # Miscellaneous

    def on_kill(self, client, origin: str | None, nickname: str, comment: str) -> Any:
        pass

    def on_ping(
        self, client, origin: str | None, server1: str, server2: str | None
    ) -> Any:
        """Answer keep-alive probes. Override to change or suppress."""
        return client.pong(server1)

    def on_pong(
        self, client, origin: str | None, daemon1: str, daemon2: str | None
    ) -> Any:
        pass

    def on_error(self, client, origin: str | None, message: str) -> Any:
        pass

    def on_away(self, client, origin: str | None, message: str | None) -> Any:
        pass

    def on_rehash(self, client, origin: str | None) -> Any:
        pass

    def on_restart(self, client, origin: str | None) -> Any:
        pass

    def on_summon(
        self, client, origin: str | None, user: str, server: str | None
    ) -> Any:
        pass

    def on_users(self, client, origin: str | None, server: str | None) -> Any:
        pass

    def on_wallops(self, client, origin: str | None, text: str) -> Any:
        pass

    def on_userhost(self, client, origin: str | None, nicknames: list[str]) -> Any:
        pass

    def on_ison(self, client, origin: str | None, nicknames: list[str]) -> Any:
        pass
