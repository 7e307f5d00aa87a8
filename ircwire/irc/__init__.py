"""IRC protocol core: message codec, dispatch engine and client."""

from .callbacks import ClientCallbacks  # noqa: F401
from .client import IRCClient  # noqa: F401
from .connection import ConnectionState, IRCConnection  # noqa: F401
from .constants import (  # noqa: F401
    MAX_MESSAGE_LENGTH,
    Command,
    RawCommand,
    Reply,
    UnknownReply,
    is_channel,
)
from .dispatcher import Invocation, IRCDispatcher, classify  # noqa: F401
from .listener import IRCListener  # noqa: F401
from .parser import (  # noqa: F401
    IRCMessage,
    MessageParseError,
    ParseErrorKind,
    encode_irc_message,
    make_message,
    parse_irc_message,
    write_protocol_string,
)

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "ClientCallbacks",
    "Command",
    "ConnectionState",
    "IRCClient",
    "IRCConnection",
    "IRCDispatcher",
    "IRCListener",
    "IRCMessage",
    "Invocation",
    "MessageParseError",
    "ParseErrorKind",
    "RawCommand",
    "Reply",
    "UnknownReply",
    "classify",
    "encode_irc_message",
    "is_channel",
    "make_message",
    "parse_irc_message",
    "write_protocol_string",
]
