"""Parameter contracts for named commands.

Each ``Command`` maps to a ``Contract``: the callback slot that receives it
and the ordered fields its parameters are destructured into. A single
routine, ``destructure``, applies any contract to a parameter list.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from .constants import Command

_DIGITS_RE = re.compile(r"[0-9]+\Z")
# Counters on the wire are unsigned 32-bit.
_COUNT_MAX = 2**32 - 1


class FieldType(Enum):
    TEXT = auto()
    INTEGER = auto()
    LIST = auto()  # one parameter split on ","
    REST = auto()  # every remaining parameter
    FLAG = auto()  # a literal token, destructured to True/False


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    type: FieldType = FieldType.TEXT
    required: bool = True
    maximum: int | None = None
    literal: str | None = None

    def missing_value(self) -> Any:
        if self.type is FieldType.FLAG:
            return False
        if self.type in (FieldType.LIST, FieldType.REST):
            return []
        return None


@dataclass(frozen=True, slots=True)
class Contract:
    """How one command's parameters reach its handler.

    With ``right_aligned`` set, a short parameter list fills the trailing
    fields and leaves the leading optional ones empty (``WHOIS [server]
    nickmasks``).
    """

    handler: str
    fields: tuple[Field, ...] = ()
    right_aligned: bool = False


class InvalidParameters(ValueError):
    """The parameters do not satisfy the command's contract."""


def _required(name: str, type_: FieldType = FieldType.TEXT, **kw: Any) -> Field:
    return Field(name, type_, True, **kw)


def _optional(name: str, type_: FieldType = FieldType.TEXT, **kw: Any) -> Field:
    return Field(name, type_, False, **kw)


COMMAND_CONTRACTS: dict[Command, Contract] = {
    Command.PASS: Contract("on_pass", (_required("password"),)),
    Command.NICK: Contract(
        "on_nick",
        (
            _required("nickname"),
            _optional("hopcount", FieldType.INTEGER, maximum=_COUNT_MAX),
        ),
    ),
    Command.USER: Contract(
        "on_user",
        (
            _required("username"),
            _required("hostname"),
            _required("servername"),
            _required("realname"),
        ),
    ),
    Command.SERVER: Contract(
        "on_server",
        (
            _required("servername"),
            _required("hopcount", FieldType.INTEGER, maximum=_COUNT_MAX),
            _required("info"),
        ),
    ),
    Command.OPER: Contract("on_oper", (_required("user"), _required("password"))),
    Command.QUIT: Contract("on_quit", (_optional("message"),)),
    Command.SQUIT: Contract("on_squit", (_required("server"), _required("comment"))),
    Command.JOIN: Contract(
        "on_join",
        (_required("channels", FieldType.LIST), _optional("keys", FieldType.LIST)),
    ),
    Command.PART: Contract("on_part", (_required("channels", FieldType.LIST),)),
    # MODE is routed on its first parameter, see CHANNEL_MODE / USER_MODE.
    Command.MODE: Contract(
        "on_user_mode", (_required("nickname"), _required("modes"))
    ),
    Command.TOPIC: Contract("on_topic", (_required("channel"), _optional("topic"))),
    Command.NAMES: Contract("on_names", (_optional("channels", FieldType.LIST),)),
    Command.LIST: Contract(
        "on_list",
        (_optional("channels", FieldType.LIST), _optional("server")),
    ),
    Command.INVITE: Contract(
        "on_invite", (_required("nickname"), _required("channel"))
    ),
    Command.KICK: Contract(
        "on_kick",
        (_required("channel"), _required("user"), _optional("comment")),
    ),
    Command.VERSION: Contract("on_version", (_optional("server"),)),
    Command.STATS: Contract("on_stats", (_optional("query"), _optional("server"))),
    Command.LINKS: Contract(
        "on_links",
        (_optional("remote_server"), _optional("server_mask")),
        right_aligned=True,
    ),
    Command.TIME: Contract("on_time", (_optional("server"),)),
    Command.CONNECT: Contract(
        "on_connect",
        (
            _required("target_server"),
            _optional("port", FieldType.INTEGER, maximum=65535),
            _optional("remote_server"),
        ),
    ),
    Command.TRACE: Contract("on_trace", (_optional("server"),)),
    Command.ADMIN: Contract("on_admin", (_optional("server"),)),
    Command.INFO: Contract("on_info", (_optional("server"),)),
    Command.PRIVMSG: Contract(
        "on_privmsg", (_required("receivers", FieldType.LIST), _required("text"))
    ),
    Command.NOTICE: Contract("on_notice", (_required("nickname"), _required("text"))),
    Command.WHO: Contract(
        "on_who",
        (_required("name"), _optional("operators_only", FieldType.FLAG, literal="o")),
    ),
    Command.WHOIS: Contract(
        "on_whois",
        (_optional("server"), _required("nickmasks", FieldType.LIST)),
        right_aligned=True,
    ),
    Command.WHOWAS: Contract(
        "on_whowas",
        (
            _required("nickname"),
            _optional("count", FieldType.INTEGER, maximum=_COUNT_MAX),
            _optional("server"),
        ),
    ),
    Command.KILL: Contract("on_kill", (_required("nickname"), _required("comment"))),
    Command.PING: Contract("on_ping", (_required("server1"), _optional("server2"))),
    Command.PONG: Contract("on_pong", (_required("daemon1"), _optional("daemon2"))),
    Command.ERROR: Contract("on_error", (_required("message"),)),
    Command.AWAY: Contract("on_away", (_optional("message"),)),
    Command.REHASH: Contract("on_rehash"),
    Command.RESTART: Contract("on_restart"),
    Command.SUMMON: Contract("on_summon", (_required("user"), _optional("server"))),
    Command.USERS: Contract("on_users", (_optional("server"),)),
    Command.WALLOPS: Contract("on_wallops", (_required("text"),)),
    Command.USERHOST: Contract(
        "on_userhost", (_required("nicknames", FieldType.REST),)
    ),
    Command.ISON: Contract("on_ison", (_required("nicknames", FieldType.REST),)),
}

CHANNEL_MODE = Contract(
    "on_channel_mode",
    (
        _required("channel"),
        _required("modes"),
        _optional("params", FieldType.REST),
    ),
)
USER_MODE = COMMAND_CONTRACTS[Command.MODE]


def _convert(field: Field, params: Sequence[str], index: int) -> Any:
    value = params[index]
    if field.type is FieldType.TEXT:
        return value
    if field.type is FieldType.LIST:
        return value.split(",")
    if field.type is FieldType.REST:
        return list(params[index:])
    if field.type is FieldType.FLAG:
        if value != field.literal:
            raise InvalidParameters(
                f"{field.name}: expected {field.literal!r}, got {value!r}"
            )
        return True
    if not _DIGITS_RE.match(value):
        raise InvalidParameters(f"{field.name}: {value!r} is not a number")
    number = int(value)
    if field.maximum is not None and number > field.maximum:
        raise InvalidParameters(f"{field.name}: {number} exceeds {field.maximum}")
    return number


def destructure(contract: Contract, params: Sequence[str]) -> dict[str, Any]:
    """Map ``params`` onto the contract's fields as keyword arguments.

    Parameters beyond the contract's fields are ignored.

    Raises:
        InvalidParameters: a required field is missing or a typed field
            does not convert.
    """
    fields = contract.fields
    available = min(len(params), len(fields))
    skipped = len(fields) - available if contract.right_aligned else 0

    kwargs: dict[str, Any] = {}
    index = 0
    for position, field in enumerate(fields):
        has_value = position >= skipped and index < len(params)
        if not has_value:
            if field.required:
                raise InvalidParameters(f"missing required parameter {field.name}")
            kwargs[field.name] = field.missing_value()
            continue
        kwargs[field.name] = _convert(field, params, index)
        if field.type is FieldType.REST:
            index = len(params)
        else:
            index += 1
    return kwargs


__all__ = [
    "CHANNEL_MODE",
    "COMMAND_CONTRACTS",
    "USER_MODE",
    "Contract",
    "Field",
    "FieldType",
    "InvalidParameters",
    "destructure",
]
