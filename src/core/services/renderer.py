"""Normalización y render de respuestas.

Funciones puras: reciben la respuesta cruda (texto de métricas, `result` de
JSON-RPC, escalares) y devuelven las líneas a imprimir. No imprimen nada; la
escritura a stdout la hacen las vistas.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.account_type import AccountType
from core.domain.errors import ViewError

SEPARATOR = "-" * 132

ALL_METRICS = "all"


def format_header(net: int, account_type: AccountType, ordinal: int, *parts: str) -> str:
    """`network #<net> :: <tipo> #<ordinal>[ :: <parte>...]`"""

    segments = [f"network #{net}", f"{account_type.label()} #{ordinal}", *parts]
    return " :: ".join(segments)


def select_metric_line(body: str, name: str) -> str:
    """Última línea de `body` que contiene `name` ("" si ninguna).

    La última gana: si una familia de métricas aparece repetida, vale la que
    el nodo declaró más abajo.
    """

    selected = ""
    for line in body.splitlines():
        if name in line:
            selected = line
    return selected


def render_metric(net: int, node: int, body: str, metric: str) -> str:
    if metric == ALL_METRICS:
        return body.rstrip("\n")
    line = select_metric_line(body, metric)
    return f"{format_header(net, AccountType.NODE, node)} :: {line}"


def render_status(net: int, node: int, rpc_address: str, result: Any) -> str:
    header = format_header(net, AccountType.NODE, node, rpc_address, "status:")
    body = json.dumps(result, indent=2, ensure_ascii=False)
    return f"{header}\n{body}"


def render_scalar(net: int, account_type: AccountType, ordinal: int, label: str, value: object) -> str:
    return format_header(net, account_type, ordinal, label, str(value))


def render_failure(net: int, account_type: AccountType, ordinal: int, error: ViewError) -> str:
    return format_header(net, account_type, ordinal, "error", f"{error.kind}: {error}")
