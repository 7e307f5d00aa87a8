import pytest

from ircwire.irc.constants import Command
from ircwire.irc.contracts import (
    CHANNEL_MODE,
    COMMAND_CONTRACTS,
    InvalidParameters,
    destructure,
)


def _fields(command, *params):
    return destructure(COMMAND_CONTRACTS[command], params)


def test_every_command_has_a_contract():
    assert set(COMMAND_CONTRACTS) == set(Command)


def test_nick_with_and_without_hopcount():
    assert _fields(Command.NICK, "alice") == {"nickname": "alice", "hopcount": None}
    assert _fields(Command.NICK, "alice", "3") == {"nickname": "alice", "hopcount": 3}


def test_non_numeric_integer_field_is_invalid():
    with pytest.raises(InvalidParameters):
        _fields(Command.NICK, "x", "abc")


@pytest.mark.parametrize(
    "command, params",
    [
        (Command.SERVER, ("srv", "abc", "info")),
        (Command.WHOWAS, ("nick", "abc")),
    ],
)
def test_non_numeric_counts_are_invalid(command, params):
    with pytest.raises(InvalidParameters):
        _fields(command, *params)


@pytest.mark.parametrize(
    "command, params, name",
    [
        (Command.NICK, ("alice", "{}"), "hopcount"),
        (Command.SERVER, ("srv", "{}", "info"), "hopcount"),
        (Command.WHOWAS, ("nick", "{}"), "count"),
    ],
)
def test_counts_are_unsigned_32_bit(command, params, name):
    at_limit = tuple(p.format(2**32 - 1) for p in params)
    assert _fields(command, *at_limit)[name] == 2**32 - 1
    over = tuple(p.format(2**32) for p in params)
    with pytest.raises(InvalidParameters):
        _fields(command, *over)


def test_missing_required_field_is_invalid():
    with pytest.raises(InvalidParameters):
        _fields(Command.PRIVMSG, "#chan")


def test_list_fields_split_on_commas():
    assert _fields(Command.PRIVMSG, "#a,#b", "hi") == {
        "receivers": ["#a", "#b"],
        "text": "hi",
    }
    assert _fields(Command.JOIN, "#a,#b") == {"channels": ["#a", "#b"], "keys": []}


def test_optional_lists_default_to_empty():
    assert _fields(Command.NAMES) == {"channels": []}
    assert _fields(Command.LIST) == {"channels": [], "server": None}


def test_who_operator_flag():
    assert _fields(Command.WHO, "*.fi") == {"name": "*.fi", "operators_only": False}
    assert _fields(Command.WHO, "*.fi", "o") == {"name": "*.fi", "operators_only": True}
    with pytest.raises(InvalidParameters):
        _fields(Command.WHO, "*.fi", "x")


def test_whois_leading_server_is_right_aligned():
    assert _fields(Command.WHOIS, "alice,bob") == {
        "server": None,
        "nickmasks": ["alice", "bob"],
    }
    assert _fields(Command.WHOIS, "irc.example", "alice") == {
        "server": "irc.example",
        "nickmasks": ["alice"],
    }


def test_links_right_aligned():
    assert _fields(Command.LINKS) == {"remote_server": None, "server_mask": None}
    assert _fields(Command.LINKS, "*.edu") == {
        "remote_server": None,
        "server_mask": "*.edu",
    }
    assert _fields(Command.LINKS, "srv", "*.edu") == {
        "remote_server": "srv",
        "server_mask": "*.edu",
    }


def test_connect_port_bounds():
    assert _fields(Command.CONNECT, "tolsun", "6667")["port"] == 6667
    with pytest.raises(InvalidParameters):
        _fields(Command.CONNECT, "tolsun", "70000")


def test_rest_fields_collect_remaining_params():
    assert _fields(Command.ISON, "a", "b", "c") == {"nicknames": ["a", "b", "c"]}
    with pytest.raises(InvalidParameters):
        _fields(Command.USERHOST)


def test_channel_mode_params():
    assert destructure(CHANNEL_MODE, ("#c", "+o", "alice")) == {
        "channel": "#c",
        "modes": "+o",
        "params": ["alice"],
    }
    assert destructure(CHANNEL_MODE, ("#c", "+n"))["params"] == []


def test_extra_params_are_ignored():
    assert _fields(Command.PING, "a", "b", "c") == {"server1": "a", "server2": "b"}


def test_no_field_commands():
    assert _fields(Command.REHASH) == {}
