from __future__ import annotations

from pathlib import Path

import pytest

from _nctl_helpers import write_network
from core.config import AppSettings, parse_env_lines
from core.domain.account_type import AccountType
from core.domain.errors import NetworkNotFound
from core.network_loader import get_path_to_net_vars, load_network_context


def test_vars_path_layout(settings: AppSettings, nctl_home: Path) -> None:
    assert get_path_to_net_vars(2, settings) == nctl_home / "assets" / "net-2" / "vars"


def test_load_network_context(settings: AppSettings, nctl_home: Path) -> None:
    network = load_network_context(1, settings)

    assert network.net == 1
    assert network.node_count == 5
    assert network.user_count == 3
    assert network.path == nctl_home / "assets" / "net-1"
    assert network.code_for(AccountType.NODE) == "node"
    assert network.code_for(AccountType.USER) == "user"


def test_unknown_network_is_not_found(settings: AppSettings) -> None:
    with pytest.raises(NetworkNotFound) as excinfo:
        load_network_context(7, settings)

    assert excinfo.value.net == 7
    assert "no vars file" in str(excinfo.value)


def test_missing_count_is_not_found(settings: AppSettings, nctl_home: Path) -> None:
    vars_path = nctl_home / "assets" / "net-3" / "vars"
    vars_path.parent.mkdir(parents=True)
    vars_path.write_text("export NCTL_NET_NODE_COUNT=2\n", encoding="utf-8")

    with pytest.raises(NetworkNotFound, match="NCTL_NET_USER_COUNT"):
        load_network_context(3, settings)


def test_non_integer_count_is_not_found(settings: AppSettings, nctl_home: Path) -> None:
    vars_path = nctl_home / "assets" / "net-3" / "vars"
    vars_path.parent.mkdir(parents=True)
    vars_path.write_text("NCTL_NET_NODE_COUNT=many\nNCTL_NET_USER_COUNT=1\n", encoding="utf-8")

    with pytest.raises(NetworkNotFound, match="not an integer"):
        load_network_context(3, settings)


def test_account_type_codes_from_vars(settings: AppSettings, nctl_home: Path) -> None:
    write_network(nctl_home, 2, node_count=1, user_count=1, extra_vars='export NCTL_ACCOUNT_TYPE_USER="account"\n')

    network = load_network_context(2, settings)

    assert network.code_for(AccountType.USER) == "account"
    assert network.code_for(AccountType.NODE) == "node"


def test_context_is_immutable(settings: AppSettings) -> None:
    network = load_network_context(1, settings)

    with pytest.raises(Exception):
        network.node_count = 10  # type: ignore[misc]


def test_parse_env_lines_handles_shell_syntax() -> None:
    text = "\n".join(
        [
            "# comment",
            "export A=1",
            'B="two"',
            "C='three'",
            "not a pair",
            "D=x=y",
        ]
    )

    assert parse_env_lines(text) == {"A": "1", "B": "two", "C": "three", "D": "x=y"}
