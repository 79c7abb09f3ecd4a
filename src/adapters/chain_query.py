"""Consultas on-chain de cuentas (balance).

Flujo por cuenta, todo contra el mismo nodo y en una sola conexión:

1) `chain_get_state_root_hash` -> state root actual
2) `state_get_item` con el account hash -> `main_purse` de la cuenta
3) `state_get_balance` sobre esa purse -> `balance_value` (motes)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_client, call_json_rpc
from core.config import AppSettings
from core.domain.errors import BadResponse
from core.interfaces.backend import ChainQuery

logger = logging.getLogger(__name__)


def _field(payload: Any, *path: str) -> Any:
    current = payload
    for key in path:
        if not isinstance(current, dict) or key not in current:
            raise BadResponse(f"missing field {'.'.join(path)}")
        current = current[key]
    return current


class ChainQueryClient(ChainQuery):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def get_account_balance(self, rpc_address: str, account_hash: str) -> str:
        with build_client(self._settings, transport=self._transport) as client:
            state_root_hash = _field(
                call_json_rpc(client, rpc_address, "chain_get_state_root_hash"),
                "state_root_hash",
            )
            item = call_json_rpc(
                client,
                rpc_address,
                "state_get_item",
                {"state_root_hash": state_root_hash, "key": account_hash, "path": []},
            )
            main_purse = _field(item, "stored_value", "Account", "main_purse")
            balance = call_json_rpc(
                client,
                rpc_address,
                "state_get_balance",
                {"state_root_hash": state_root_hash, "purse_uref": main_purse},
            )
        value = _field(balance, "balance_value")
        logger.debug("%s balance=%s (root %s)", account_hash, value, state_root_hash)
        return str(value)
