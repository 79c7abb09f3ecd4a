"""Backend del nodo vía HTTP.

Implementa `core.interfaces.backend.NodeBackend`:
- métricas: GET `<rest>/metrics` (texto Prometheus, devuelto tal cual)
- estado: JSON-RPC `info_get_status`
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import build_client, call_json_rpc, get_text
from core.config import AppSettings
from core.interfaces.backend import NodeBackend

STATUS_METHOD = "info_get_status"


class HttpNodeBackend(NodeBackend):
    """Consultas REST/JSON-RPC contra un nodo, una conexión por consulta."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _client(self) -> httpx.Client:
        return build_client(self._settings, transport=self._transport)

    def get_metrics(self, rest_address: str) -> str:
        with self._client() as client:
            return get_text(client, f"{rest_address}/metrics")

    def get_status(self, rpc_address: str) -> Any:
        with self._client() as client:
            return call_json_rpc(client, rpc_address, STATUS_METHOD)
