"""Configuration file loading."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..constants import IRC_CONF_FILE
from ..errors.internal import ConfigError
from ..logs.logger import logger
from .model import ClientConfig


class ConfigLoader:
    """Reads a JSON configuration file into a validated ``ClientConfig``."""

    def __init__(self, config_file: str | os.PathLike[str] | None = None) -> None:
        self.config_file = Path(
            config_file or os.environ.get("IRC_CONF_FILE", IRC_CONF_FILE)
        )

    def load_raw(self) -> dict[str, Any]:
        """Return the decoded JSON object.

        Raises:
            ConfigError: the file is missing, unreadable or not a JSON object.
        """
        try:
            text = self.config_file.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ConfigError(
                f"configuration file not found: {self.config_file}",
                data={"path": str(self.config_file)},
            ) from e
        except OSError as e:
            raise ConfigError(f"cannot read {self.config_file}: {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"invalid JSON in {self.config_file}: {e.msg} (line {e.lineno})",
                data={"path": str(self.config_file)},
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_file} must contain a JSON object")
        return data

    def load(self) -> ClientConfig:
        """Load and validate the configuration.

        Raises:
            ConfigError: see ``load_raw``, or a field failed validation.
        """
        data = self.load_raw()
        try:
            config = ClientConfig.from_dict(data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(
                f"invalid configuration in {self.config_file}: {problems}",
                data={"path": str(self.config_file)},
            ) from e
        logger.log_event(
            "app", "config_loaded", nick=config.nick, host=config.server, port=config.port
        )
        return config


def load_config(config_file: str | os.PathLike[str] | None = None) -> ClientConfig:
    return ConfigLoader(config_file).load()
