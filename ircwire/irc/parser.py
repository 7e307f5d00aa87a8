"""IRC message model and wire codec.

``parse_irc_message`` turns one CRLF-terminated line into an ``IRCMessage``;
``encode_irc_message`` does the reverse and refuses parameters it cannot write
faithfully, so ``parse_irc_message(encode_irc_message(m)) == m`` for every
message it accepts whose command token is well formed.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..errors.internal import EncodingError, ParsingError
from .constants import MAX_MESSAGE_LENGTH, MessageKind, is_reply, resolve_kind

_LINE_RE = re.compile(
    r"^(?::(?P<origin>[^ \r\n\0]+) )?"
    r"(?P<command>[A-Z]+|[0-9]{3})"
    r"(?: (?P<params>[^\r\n\0]*))?\r\n\Z"
)
_FORBIDDEN = ("\r", "\n", "\0")


@dataclass(frozen=True, slots=True)
class IRCMessage:
    """One protocol message.

    ``origin`` is ``None`` when the line carried no prefix (the message comes
    from the directly connected peer). ``params`` are position-significant;
    only the last one may contain spaces or start with ``:``; encoding
    rejects messages that break this.
    """

    origin: str | None
    kind: MessageKind
    params: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.params, tuple):
            object.__setattr__(self, "params", tuple(self.params))

    @property
    def is_reply(self) -> bool:
        return is_reply(self.kind)

    @property
    def nick(self) -> str | None:
        """Nickname part of a ``nick!user@host`` origin."""
        if self.origin is None:
            return None
        return self.origin.split("!", 1)[0]

    def to_protocol_string(self) -> str:
        return encode_irc_message(self).decode("utf-8")


def make_message(
    kind: MessageKind, *params: str, origin: str | None = None
) -> IRCMessage:
    """Build a message from positional parameters, dropping ``None`` values."""
    return IRCMessage(origin, kind, tuple(p for p in params if p is not None))


class ParseErrorKind(Enum):
    MESSAGE_TOO_LONG = "message_too_long"
    GRAMMAR_MISMATCH = "grammar_mismatch"


class MessageParseError(ParsingError):
    """Raised by ``parse_irc_message`` for text that is not a valid line.

    Attributes:
        kind: Which check failed.
        line: The offending input, decoded.
    """

    def __init__(self, kind: ParseErrorKind, line: str, reason: str) -> None:
        super().__init__(
            f"{kind.value}: {reason}", data={"kind": kind.value, "reason": reason}
        )
        self.kind = kind
        self.line = line
        self.reason = reason


def parse_irc_message(raw_line: str | bytes) -> IRCMessage:
    """Parse one complete line, CRLF included.

    Bytes are decoded as UTF-8 with replacement characters for invalid
    sequences; peers are not required to share a charset. The length check
    runs before anything else and counts bytes.

    Raises:
        MessageParseError: ``MESSAGE_TOO_LONG`` or ``GRAMMAR_MISMATCH``.
    """
    if isinstance(raw_line, bytes | bytearray):
        length = len(raw_line)
        line = bytes(raw_line).decode("utf-8", errors="replace")
    else:
        line = raw_line
        length = len(line.encode("utf-8", errors="surrogatepass"))

    if length > MAX_MESSAGE_LENGTH:
        raise MessageParseError(
            ParseErrorKind.MESSAGE_TOO_LONG,
            line,
            f"line is {length} bytes, limit is {MAX_MESSAGE_LENGTH}",
        )

    match = _LINE_RE.match(line)
    if match is None:
        raise MessageParseError(
            ParseErrorKind.GRAMMAR_MISMATCH, line, _diagnose(line)
        )

    return IRCMessage(
        origin=match.group("origin"),
        kind=resolve_kind(match.group("command")),
        params=tuple(_split_params(match.group("params") or "")),
    )


def _split_params(tail: str) -> list[str]:
    params: list[str] = []
    offset = 0
    length = len(tail)
    while offset < length:
        if tail[offset] == ":":
            # Trailing parameter: the rest of the line, spaces included.
            params.append(tail[offset + 1 :])
            break
        end = tail.find(" ", offset)
        if end == -1:
            params.append(tail[offset:])
            break
        params.append(tail[offset:end])
        offset = end + 1
    return params


def _diagnose(line: str) -> str:
    if not line.endswith("\r\n"):
        return "line must end with CRLF"
    body = line[:-2]
    if any(ch in body for ch in _FORBIDDEN):
        return "line contains CR, LF or NUL before its end"
    if body.startswith(":"):
        origin, sep, body = body[1:].partition(" ")
        if not origin or not sep:
            return "origin prefix must be ':<origin>' followed by a space"
    command = body.split(" ", 1)[0]
    if not command:
        return "missing command"
    return f"command {command!r} is neither uppercase letters nor three digits"


def encode_irc_message(message: IRCMessage) -> bytes:
    """Render ``message`` as one wire line, CRLF included.

    Only the final parameter may contain a space or start with ``:``; it is
    written in the ``:`` trailing form when it does, or when it is empty, so
    it parses back unchanged.

    Raises:
        EncodingError: a parameter cannot be represented on the wire (CR,
            LF or NUL anywhere; a space or leading ``:`` before the final
            position), or the line would exceed ``MAX_MESSAGE_LENGTH``
            bytes. Lines are never truncated.
    """
    parts: list[str] = []
    if message.origin is not None:
        if not message.origin or any(ch in message.origin for ch in (" ", *_FORBIDDEN)):
            raise EncodingError(
                f"origin {message.origin!r} cannot be encoded",
                data={"command": message.kind.token},
            )
        parts.append(f":{message.origin} ")
    parts.append(message.kind.token)
    last = len(message.params) - 1
    for index, param in enumerate(message.params):
        if any(ch in param for ch in _FORBIDDEN):
            raise _unencodable(message, index, "contains CR, LF or NUL")
        if index == last:
            trailing = not param or " " in param or param[0] == ":"
            parts.append(f" :{param}" if trailing else f" {param}")
            continue
        if " " in param or param.startswith(":"):
            raise _unencodable(
                message, index, "only the final parameter may contain a space or start with ':'"
            )
        parts.append(f" {param}")
    parts.append("\r\n")

    data = "".join(parts).encode("utf-8")
    if len(data) > MAX_MESSAGE_LENGTH:
        raise EncodingError(
            f"encoded line is {len(data)} bytes, limit is {MAX_MESSAGE_LENGTH}",
            data={"length": len(data), "command": message.kind.token},
        )
    return data


def _unencodable(message: IRCMessage, index: int, reason: str) -> EncodingError:
    return EncodingError(
        f"parameter {index} of {message.kind.token}: {reason}",
        data={"command": message.kind.token, "index": index},
    )


class LineSink(Protocol):
    def write(self, data: bytes, /) -> object: ...

    def flush(self) -> object: ...


def write_protocol_string(message: IRCMessage, sink: LineSink) -> int:
    """Encode ``message`` into ``sink`` and flush it. Returns bytes written."""
    data = encode_irc_message(message)
    sink.write(data)
    sink.flush()
    return len(data)


def split_list(value: str) -> list[str]:
    """Split a comma separated parameter such as ``#a,#b``."""
    return value.split(",")


def join_list(values: Sequence[str]) -> str:
    return ",".join(values)
