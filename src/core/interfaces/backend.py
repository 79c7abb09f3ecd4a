"""Contratos de los backends del nodo.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Las vistas dependen de estas abstracciones; los tests usan fakes en memoria
  y la CLI usa los adaptadores httpx.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class NodeBackend(Protocol):
    """Consultas de estado y métricas contra un único nodo.

    Reglas de diseño:
    - Síncrono: el fan-out es secuencial y ordenado.
    - Los fallos se expresan como `Unreachable` / `BadResponse`.
    """

    def get_metrics(self, rest_address: str) -> str:
        """Devuelve el cuerpo de `<rest_address>/metrics` tal cual."""

        ...

    def get_status(self, rpc_address: str) -> Any:
        """Devuelve el campo `result` de `info_get_status`."""

        ...


@runtime_checkable
class ChainQuery(Protocol):
    """Consultas on-chain sobre cuentas."""

    def get_account_balance(self, rpc_address: str, account_hash: str) -> str:
        """Balance (motes, decimal) de la main purse de la cuenta."""

        ...
