"""Message classification and dispatch."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..logs.logger import logger
from .callbacks import ClientCallbacks
from .constants import Command, RawCommand, Reply, UnknownReply, is_channel
from .contracts import (
    CHANNEL_MODE,
    COMMAND_CONTRACTS,
    Contract,
    InvalidParameters,
    destructure,
)
from .parser import IRCMessage

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient

LIFECYCLE_SLOTS = ("on_client_connect", "on_client_disconnect")
META_SLOTS = (
    "on_any_message",
    "on_invalid_message",
    "on_unknown_command",
    "on_unknown_reply",
)
# Slots whose handler receives (client, message) instead of destructured args.
_FALLBACK_SLOTS = frozenset(META_SLOTS)


@dataclass(frozen=True, slots=True)
class Invocation:
    """Outcome of classifying one message.

    ``kwargs`` is ``None`` when the handler takes the raw message (replies
    and fallbacks); otherwise it holds the destructured parameters.
    """

    slot: str
    kwargs: dict[str, Any] | None = None

    @property
    def is_fallback(self) -> bool:
        return self.slot in _FALLBACK_SLOTS


def _contract_for(command: Command, params: tuple[str, ...]) -> Contract:
    if command is Command.MODE and params and is_channel(params[0]):
        return CHANNEL_MODE
    return COMMAND_CONTRACTS[command]


def classify(message: IRCMessage) -> Invocation:
    """Decide which handler slot receives ``message`` and with what arguments.

    Pure function: exactly one slot is chosen for every message.
    """
    kind = message.kind
    if isinstance(kind, Reply):
        return Invocation(kind.handler_name)
    if isinstance(kind, UnknownReply):
        return Invocation("on_unknown_reply")
    if isinstance(kind, RawCommand):
        return Invocation("on_unknown_command")
    contract = _contract_for(kind, message.params)
    try:
        kwargs = destructure(contract, message.params)
    except InvalidParameters:
        return Invocation("on_invalid_message")
    return Invocation(contract.handler, kwargs)


def iter_slots() -> Iterator[str]:
    """Every handler slot the dispatcher can invoke."""
    yield from LIFECYCLE_SLOTS
    yield from META_SLOTS
    for command in Command:
        contract = COMMAND_CONTRACTS.get(command)
        assert contract is not None, f"no parameter contract for {command.name}"
        yield contract.handler
    yield CHANNEL_MODE.handler
    for reply in Reply:
        yield reply.handler_name


def _noop(*_args: Any, **_kwargs: Any) -> None:
    return None


class IRCDispatcher:
    """Routes parsed messages to the callbacks of one client.

    The handler registry is built once from ``callbacks``; individual slots
    can be replaced afterwards with ``register``.
    """

    def __init__(self, client: IRCClient, callbacks: ClientCallbacks | None = None):
        self.client = client
        self.callbacks = callbacks if callbacks is not None else ClientCallbacks()
        self._registry: dict[str, Callable[..., Any]] = {}
        for slot in iter_slots():
            self._registry[slot] = getattr(self.callbacks, slot, None) or _noop

    def handler_for(self, slot: str) -> Callable[..., Any]:
        return self._registry[slot]

    def register(self, event: str | Command | Reply, handler: Callable[..., Any]) -> None:
        """Replace the handler of one slot.

        ``event`` is a slot name (``"on_privmsg"``), a ``Command`` or a
        ``Reply``. MODE has two slots and must be registered by name.
        """
        if isinstance(event, Reply):
            slot = event.handler_name
        elif isinstance(event, Command):
            if event is Command.MODE:
                raise ValueError(
                    "MODE routes to on_channel_mode or on_user_mode; register by slot name"
                )
            slot = COMMAND_CONTRACTS[event].handler
        else:
            slot = event
        if slot not in self._registry:
            raise KeyError(f"unknown handler slot {slot!r}")
        self._registry[slot] = handler

    async def client_connected(self) -> None:
        await self._invoke(self._registry["on_client_connect"], self.client)

    async def client_disconnected(self) -> None:
        await self._invoke(self._registry["on_client_disconnect"], self.client)

    async def dispatch(self, message: IRCMessage) -> Invocation:
        """Run the any-message hook, then exactly one handler for ``message``."""
        await self._invoke(self._registry["on_any_message"], self.client, message)

        invocation = classify(message)
        if invocation.is_fallback:
            action = invocation.slot.removeprefix("on_")
            logger.log_event(
                "irc",
                action,
                level=logging.DEBUG,
                kind=message.kind.token,
                params=list(message.params),
            )

        handler = self._registry[invocation.slot]
        if invocation.kwargs is None:
            await self._invoke(handler, self.client, message)
        else:
            await self._invoke(
                handler, self.client, message.origin, **invocation.kwargs
            )
        return invocation

    @staticmethod
    async def _invoke(handler: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        result = handler(*args, **kwargs)
        if inspect.isawaitable(result):
            await result
