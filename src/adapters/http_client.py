"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para REST y JSON-RPC.
- Traduce excepciones de httpx a errores del dominio (`Unreachable`,
  `BadResponse`), así el fan-out no conoce httpx.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.config import AppSettings
from core.domain.errors import BadResponse, Unreachable

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults del proyecto.

    Se crea uno por consulta (y se cierra al terminarla): no hay pooling entre
    targets del fan-out.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _send(client: httpx.Client, request: httpx.Request) -> httpx.Response:
    logger.debug("%s %s", request.method, request.url)
    try:
        response = client.send(request)
    except httpx.TransportError as exc:
        raise Unreachable(f"{request.url}: {exc.__class__.__name__}: {exc}") from exc
    except httpx.HTTPError as exc:
        # Cuerpo corrupto (Content-Encoding), demasiados redirects, etc.
        raise BadResponse(f"{request.url}: {exc.__class__.__name__}: {exc}") from exc
    if not response.is_success:
        raise BadResponse(f"{request.url}: HTTP {response.status_code}")
    return response


def get_text(client: httpx.Client, url: str) -> str:
    response = _send(client, client.build_request("GET", url))
    return response.text


def json_rpc_envelope(method: str, params: Any | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {"id": 1, "jsonrpc": "2.0", "method": method}
    if params is not None:
        envelope["params"] = params
    return envelope


def call_json_rpc(client: httpx.Client, url: str, method: str, params: Any | None = None) -> Any:
    """POST JSON-RPC 2.0 y devuelve `result`.

    Un `error` en la respuesta, un JSON inválido o la ausencia de `result` se
    reportan como `BadResponse`.
    """

    request = client.build_request("POST", url, json=json_rpc_envelope(method, params))
    response = _send(client, request)
    try:
        payload = response.json()
    except ValueError as exc:
        raise BadResponse(f"{url}: {method} returned invalid JSON") from exc

    if not isinstance(payload, dict):
        raise BadResponse(f"{url}: {method} returned a non-object payload")
    if payload.get("error") is not None:
        error = payload["error"]
        message = error.get("message") if isinstance(error, dict) else error
        raise BadResponse(f"{url}: {method} failed: {message}")
    if "result" not in payload:
        raise BadResponse(f"{url}: {method} response has no result")
    return payload["result"]
