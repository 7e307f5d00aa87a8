import json

import pytest
from pydantic import ValidationError

from ircwire.config import ClientConfig, ConfigLoader, load_config
from ircwire.constants import IRC_DEFAULT_PORT
from ircwire.errors import ConfigError


def test_defaults_fill_identity():
    cfg = ClientConfig(nick="bot", server=" irc.example.net ")
    assert cfg.server == "irc.example.net"
    assert cfg.port == IRC_DEFAULT_PORT
    assert cfg.username == "bot"
    assert cfg.realname == "bot"
    assert cfg.password is None


def test_blank_password_is_none():
    assert ClientConfig(nick="bot", server="s", password="  ").password is None


@pytest.mark.parametrize(
    "data",
    [
        {"nick": "", "server": "s"},
        {"nick": "two words", "server": "s"},
        {"nick": "bot", "server": "s", "port": 0},
        {"nick": "bot", "server": "s", "port": 70000},
        {"nick": "bot"},
        {"nick": "bot", "server": "s", "hostname": "bad host"},
        {"nick": "bot", "server": "s", "username": ":user"},
    ],
)
def test_invalid_values_rejected(data):
    with pytest.raises(ValidationError):
        ClientConfig.from_dict(data)


def test_from_dict_accepts_host_alias():
    cfg = ClientConfig.from_dict({"nick": "bot", "host": "irc.example.net", "port": 6697})
    assert cfg.server == "irc.example.net"
    assert cfg.to_dict()["port"] == 6697
    assert "password" not in cfg.to_dict()


def test_loader_reads_json(tmp_path):
    path = tmp_path / "ircwire.conf"
    path.write_text(json.dumps({"nick": "bot", "server": "irc.example.net", "debug": True}))
    cfg = ConfigLoader(path).load()
    assert cfg.nick == "bot"
    assert cfg.debug is True


def test_loader_uses_env_path(tmp_path, monkeypatch):
    path = tmp_path / "from-env.conf"
    path.write_text(json.dumps({"nick": "envbot", "server": "s"}))
    monkeypatch.setenv("IRC_CONF_FILE", str(path))
    assert load_config().nick == "envbot"


def test_loader_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader(tmp_path / "absent.conf").load()


def test_loader_bad_json(tmp_path):
    path = tmp_path / "bad.conf"
    path.write_text("{nick: ")
    with pytest.raises(ConfigError, match="invalid JSON"):
        ConfigLoader(path).load()


def test_loader_non_object(tmp_path):
    path = tmp_path / "list.conf"
    path.write_text("[]")
    with pytest.raises(ConfigError, match="JSON object"):
        ConfigLoader(path).load()


def test_loader_validation_error(tmp_path):
    path = tmp_path / "invalid.conf"
    path.write_text(json.dumps({"nick": "bot", "server": "s", "port": "nope"}))
    with pytest.raises(ConfigError, match="port"):
        ConfigLoader(path).load()
