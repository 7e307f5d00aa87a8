"""Protocol vocabulary: named commands, numeric replies and line limits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

# Maximum length of one protocol line in bytes, including the trailing CRLF.
MAX_MESSAGE_LENGTH = 512

CHANNEL_PREFIXES = ("#", "&")


class Command(Enum):
    """Named protocol verbs. The value is the literal wire token."""

    PASS = "PASS"
    NICK = "NICK"
    USER = "USER"
    SERVER = "SERVER"
    OPER = "OPER"
    QUIT = "QUIT"
    SQUIT = "SQUIT"
    JOIN = "JOIN"
    PART = "PART"
    MODE = "MODE"
    TOPIC = "TOPIC"
    NAMES = "NAMES"
    LIST = "LIST"
    INVITE = "INVITE"
    KICK = "KICK"
    VERSION = "VERSION"
    STATS = "STATS"
    LINKS = "LINKS"
    TIME = "TIME"
    CONNECT = "CONNECT"
    TRACE = "TRACE"
    ADMIN = "ADMIN"
    INFO = "INFO"
    PRIVMSG = "PRIVMSG"
    NOTICE = "NOTICE"
    WHO = "WHO"
    WHOIS = "WHOIS"
    WHOWAS = "WHOWAS"
    KILL = "KILL"
    PING = "PING"
    PONG = "PONG"
    ERROR = "ERROR"
    AWAY = "AWAY"
    REHASH = "REHASH"
    RESTART = "RESTART"
    SUMMON = "SUMMON"
    USERS = "USERS"
    WALLOPS = "WALLOPS"
    USERHOST = "USERHOST"
    ISON = "ISON"

    @property
    def token(self) -> str:
        return self.value


class Reply(IntEnum):
    """Well-known numeric replies (RFC 1459 / RFC 2812 registry)."""

    # Command responses
    RPL_WELCOME = 1
    RPL_YOURHOST = 2
    RPL_CREATED = 3
    RPL_MYINFO = 4
    RPL_BOUNCE = 5
    RPL_USERHOST = 302
    RPL_ISON = 303
    RPL_AWAY = 301
    RPL_UNAWAY = 305
    RPL_NOWAWAY = 306
    RPL_WHOISUSER = 311
    RPL_WHOISSERVER = 312
    RPL_WHOISOPERATOR = 313
    RPL_WHOISIDLE = 317
    RPL_ENDOFWHOIS = 318
    RPL_WHOISCHANNELS = 319
    RPL_WHOWASUSER = 314
    RPL_ENDOFWHOWAS = 369
    RPL_LISTSTART = 321
    RPL_LIST = 322
    RPL_LISTEND = 323
    RPL_UNIQOPIS = 325
    RPL_CHANNELMODEIS = 324
    RPL_NOTOPIC = 331
    RPL_TOPIC = 332
    RPL_INVITING = 341
    RPL_SUMMONING = 342
    RPL_INVITELIST = 346
    RPL_ENDOFINVITELIST = 347
    RPL_EXCEPTLIST = 348
    RPL_ENDOFEXCEPTLIST = 349
    RPL_VERSION = 351
    RPL_WHOREPLY = 352
    RPL_ENDOFWHO = 315
    RPL_NAMREPLY = 353
    RPL_ENDOFNAMES = 366
    RPL_LINKS = 364
    RPL_ENDOFLINKS = 365
    RPL_BANLIST = 367
    RPL_ENDOFBANLIST = 368
    RPL_INFO = 371
    RPL_ENDOFINFO = 374
    RPL_MOTDSTART = 375
    RPL_MOTD = 372
    RPL_ENDOFMOTD = 376
    RPL_YOUREOPER = 381
    RPL_REHASHING = 382
    RPL_YOURESERVICE = 383
    RPL_TIME = 391
    RPL_USERSSTART = 392
    RPL_USERS = 393
    RPL_ENDOFUSERS = 394
    RPL_NOUSERS = 395
    RPL_TRACELINK = 200
    RPL_TRACECONNECTING = 201
    RPL_TRACEHANDSHAKE = 202
    RPL_TRACEUNKNOWN = 203
    RPL_TRACEOPERATOR = 204
    RPL_TRACEUSER = 205
    RPL_TRACESERVER = 206
    RPL_TRACESERVICE = 207
    RPL_TRACENEWTYPE = 208
    RPL_TRACECLASS = 209
    RPL_TRACERECONNECT = 210
    RPL_TRACELOG = 261
    RPL_TRACEEND = 262
    RPL_STATSLINKINFO = 211
    RPL_STATSCOMMANDS = 212
    RPL_ENDOFSTATS = 219
    RPL_STATSUPTIME = 242
    RPL_STATSOLINE = 243
    RPL_UMODEIS = 221
    RPL_SERVLIST = 234
    RPL_SERVLISTEND = 235
    RPL_LUSERCLIENT = 251
    RPL_LUSEROP = 252
    RPL_LUSERUNKNOWN = 253
    RPL_LUSERCHANNELS = 254
    RPL_LUSERME = 255
    RPL_ADMINME = 256
    RPL_ADMINLOC1 = 257
    RPL_ADMINLOC2 = 258
    RPL_ADMINEMAIL = 259
    RPL_TRYAGAIN = 263

    # Error replies
    ERR_NOSUCHNICK = 401
    ERR_NOSUCHSERVER = 402
    ERR_NOSUCHCHANNEL = 403
    ERR_CANNOTSENDTOCHAN = 404
    ERR_TOOMANYCHANNELS = 405
    ERR_WASNOSUCHNICK = 406
    ERR_TOOMANYTARGETS = 407
    ERR_NOSUCHSERVICE = 408
    ERR_NOORIGIN = 409
    ERR_NORECIPIENT = 411
    ERR_NOTEXTTOSEND = 412
    ERR_NOTOPLEVEL = 413
    ERR_WILDTOPLEVEL = 414
    ERR_BADMASK = 415
    ERR_UNKNOWNCOMMAND = 421
    ERR_NOMOTD = 422
    ERR_NOADMININFO = 423
    ERR_FILEERROR = 424
    ERR_NONICKNAMEGIVEN = 431
    ERR_ERRONEUSNICKNAME = 432
    ERR_NICKNAMEINUSE = 433
    ERR_NICKCOLLISION = 436
    ERR_UNAVAILRESOURCE = 437
    ERR_USERNOTINCHANNEL = 441
    ERR_NOTONCHANNEL = 442
    ERR_USERONCHANNEL = 443
    ERR_NOLOGIN = 444
    ERR_SUMMONDISABLED = 445
    ERR_USERSDISABLED = 446
    ERR_NOTREGISTERED = 451
    ERR_NEEDMOREPARAMS = 461
    ERR_ALREADYREGISTERED = 462
    ERR_NOPERMFORHOST = 463
    ERR_PASSWDMISMATCH = 464
    ERR_YOUREBANNEDCREEP = 465
    ERR_YOUWILLBEBANNED = 466
    ERR_KEYSET = 467
    ERR_CHANNELISFULL = 471
    ERR_UNKNOWNMODE = 472
    ERR_INVITEONLYCHAN = 473
    ERR_BANNEDFROMCHAN = 474
    ERR_BADCHANNELKEY = 475
    ERR_BADCHANMASK = 476
    ERR_NOCHANMODES = 477
    ERR_BANLISTFULL = 478
    ERR_NOPRIVILEGES = 481
    ERR_CHANOPRIVSNEEDED = 482
    ERR_CANTKILLSERVER = 483
    ERR_RESTRICTED = 484
    ERR_UNIQOPPRIVSNEEDED = 485
    ERR_NOOPERHOST = 491
    ERR_UMODEUNKNOWNFLAG = 501
    ERR_USERSDONTMATCH = 502

    # Reserved / obsolete
    RPL_SERVICEINFO = 231
    RPL_ENDOFSERVICES = 232
    RPL_SERVICE = 233
    RPL_NONE = 300
    RPL_WHOISCHANOP = 316
    RPL_KILLDONE = 361
    RPL_CLOSING = 362
    RPL_CLOSEEND = 363
    RPL_INFOSTART = 373
    RPL_MYPORTIS = 384
    RPL_STATSCLINE = 213
    RPL_STATSNLINE = 214
    RPL_STATSILINE = 215
    RPL_STATSKLINE = 216
    RPL_STATSQLINE = 217
    RPL_STATSYLINE = 218
    RPL_STATSVLINE = 240
    RPL_STATSLLINE = 241
    RPL_STATSHLINE = 244
    RPL_STATSPING = 246
    RPL_STATSBLINE = 247
    RPL_STATSDLINE = 250
    ERR_NOSERVICEHOST = 492

    # Provisional: not in RFC 1459, values seen on live networks
    RPL_TOPICDATE = 333
    ERR_MSGFORBIDDEN = 505

    @property
    def token(self) -> str:
        return f"{self.value:03d}"

    @property
    def handler_name(self) -> str:
        """Name of the callback slot receiving this reply, e.g. ``on_rpl_welcome``."""
        return f"on_{self.name.lower()}"


@dataclass(frozen=True, slots=True)
class RawCommand:
    """A verb outside the fixed vocabulary, kept verbatim."""

    token: str


@dataclass(frozen=True, slots=True)
class UnknownReply:
    """A numeric reply outside the known registry."""

    code: int

    @property
    def token(self) -> str:
        return f"{self.code:03d}"


MessageKind = Command | RawCommand | Reply | UnknownReply

_COMMANDS_BY_TOKEN: dict[str, Command] = {c.value: c for c in Command}
_REPLIES_BY_CODE: dict[int, Reply] = {r.value: r for r in Reply}


def resolve_kind(token: str) -> MessageKind:
    """Resolve a command token taken from the wire.

    Tokens starting with a digit are numeric replies; anything else is
    matched case-sensitively against the command vocabulary. Resolution
    never fails: unrecognized tokens become ``RawCommand`` or
    ``UnknownReply``.
    """
    if token.isascii() and token.isdigit():
        code = int(token)
        reply = _REPLIES_BY_CODE.get(code)
        return reply if reply is not None else UnknownReply(code)
    command = _COMMANDS_BY_TOKEN.get(token)
    return command if command is not None else RawCommand(token)


def is_reply(kind: MessageKind) -> bool:
    return isinstance(kind, Reply | UnknownReply)


def is_channel(name: str) -> bool:
    """Whether ``name`` designates a channel rather than a nickname."""
    return name.startswith(CHANNEL_PREFIXES)


__all__ = [
    "CHANNEL_PREFIXES",
    "MAX_MESSAGE_LENGTH",
    "Command",
    "MessageKind",
    "RawCommand",
    "Reply",
    "UnknownReply",
    "is_channel",
    "is_reply",
    "resolve_kind",
]
