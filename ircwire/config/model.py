from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import (
    IRC_CONNECT_MAX_ATTEMPTS,
    IRC_CONNECT_TIMEOUT,
    IRC_DEFAULT_PORT,
)


class ClientConfig(BaseModel):
    """Connection and registration settings for one IRC client.

    Attributes:
        nick: Nickname sent with NICK during registration.
        server: Host name or address of the IRC server.
        port: TCP port of the server.
        password: Optional connection password, sent with PASS.
        username: User name for USER; defaults to ``nick``.
        realname: Real name for USER; defaults to ``nick``.
        hostname: Host name announced in USER. When unset the local socket
            address is used.
        debug: Log every raw line in and out at INFO level.
        connect_timeout: Seconds allowed for one TCP connect attempt.
        max_connect_attempts: Connect attempts before giving up.
    """

    nick: str = Field(min_length=1)
    server: str = Field(min_length=1)
    port: int = Field(default=IRC_DEFAULT_PORT, ge=1, le=65535)
    password: str | None = None
    username: str | None = None
    realname: str | None = None
    hostname: str | None = None
    debug: bool = False
    connect_timeout: float = Field(default=IRC_CONNECT_TIMEOUT, gt=0)
    max_connect_attempts: int = Field(default=IRC_CONNECT_MAX_ATTEMPTS, ge=1)

    @field_validator("nick", "server", mode="before")
    @classmethod
    def strip_required(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nick", "username", "hostname")
    @classmethod
    def reject_whitespace(cls, v: str | None) -> str | None:
        """A middle parameter must not contain spaces or start with a colon."""
        if v is None:
            return v
        if any(ch.isspace() for ch in v):
            raise ValueError("must not contain whitespace")
        if v.startswith(":"):
            raise ValueError("must not start with ':'")
        return v

    @field_validator("password", "hostname", mode="before")
    @classmethod
    def empty_as_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def fill_identity(self) -> ClientConfig:
        if not self.username:
            self.username = self.nick
        if not self.realname:
            self.realname = self.nick
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Create a ClientConfig from a dictionary.

        ``host`` is accepted as an alias of ``server``.
        """
        norm_data = dict(data)
        if "server" not in norm_data and "host" in norm_data:
            norm_data["server"] = norm_data.pop("host")
        return cls.model_validate(norm_data)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
