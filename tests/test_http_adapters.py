from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from adapters.chain_query import ChainQueryClient
from adapters.http_client import json_rpc_envelope
from adapters.node_backend import HttpNodeBackend
from core.config import AppSettings
from core.domain.errors import BadResponse, Unreachable

RPC = "http://localhost:40101/rpc"
REST = "http://localhost:50101"


def _backend(settings: AppSettings, handler) -> HttpNodeBackend:
    return HttpNodeBackend(settings, transport=httpx.MockTransport(handler))


def test_status_envelope_is_fixed() -> None:
    assert json_rpc_envelope("info_get_status") == {"id": 1, "jsonrpc": "2.0", "method": "info_get_status"}


def test_get_metrics_returns_body_verbatim(settings: AppSettings) -> None:
    seen: list[httpx.Request] = []
    body = "# TYPE uptime gauge\nuptime 12\n"

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=body)

    assert _backend(settings, handler).get_metrics(REST) == body
    assert seen[0].method == "GET"
    assert str(seen[0].url) == f"{REST}/metrics"


def test_get_status_posts_envelope_and_returns_result(settings: AppSettings) -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": {"api_version": "1.4.0"}})

    assert _backend(settings, handler).get_status(RPC) == {"api_version": "1.4.0"}
    assert seen == [{"id": 1, "jsonrpc": "2.0", "method": "info_get_status"}]


def test_transport_failure_is_unreachable(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(Unreachable, match="ConnectError"):
        _backend(settings, handler).get_metrics(REST)


def test_non_2xx_is_bad_response(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(BadResponse, match="HTTP 503"):
        _backend(settings, handler).get_status(RPC)


def test_malformed_json_is_bad_response(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    with pytest.raises(BadResponse, match="invalid JSON"):
        _backend(settings, handler).get_status(RPC)


def test_rpc_error_object_is_bad_response(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "no such method"}})

    with pytest.raises(BadResponse, match="no such method"):
        _backend(settings, handler).get_status(RPC)


def test_missing_result_is_bad_response(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1})

    with pytest.raises(BadResponse, match="no result"):
        _backend(settings, handler).get_status(RPC)


def _chain_handler(results: dict[str, object]):
    calls: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        calls.append(payload)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": results[payload["method"]]})

    return handler, calls


def test_balance_walks_state_root_account_and_purse(settings: AppSettings) -> None:
    handler, calls = _chain_handler(
        {
            "chain_get_state_root_hash": {"state_root_hash": "abc"},
            "state_get_item": {"stored_value": {"Account": {"main_purse": "uref-01-007"}}},
            "state_get_balance": {"balance_value": "1000000000000000000000000000000000"},
        }
    )
    client = ChainQueryClient(settings, transport=httpx.MockTransport(handler))

    balance = client.get_account_balance(RPC, "account-hash-ff")

    assert balance == "1000000000000000000000000000000000"
    assert [c["method"] for c in calls] == ["chain_get_state_root_hash", "state_get_item", "state_get_balance"]
    assert calls[1]["params"] == {"state_root_hash": "abc", "key": "account-hash-ff", "path": []}
    assert calls[2]["params"] == {"state_root_hash": "abc", "purse_uref": "uref-01-007"}


def test_balance_missing_account_is_bad_response(settings: AppSettings) -> None:
    handler, _ = _chain_handler(
        {
            "chain_get_state_root_hash": {"state_root_hash": "abc"},
            "state_get_item": {"stored_value": {"CLValue": {}}},
            "state_get_balance": {"balance_value": "0"},
        }
    )
    client = ChainQueryClient(settings, transport=httpx.MockTransport(handler))

    with pytest.raises(BadResponse, match="stored_value.Account.main_purse"):
        client.get_account_balance(RPC, "account-hash-ff")


def test_corrupt_encoded_body_is_bad_response(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip"))

    with pytest.raises(BadResponse, match="DecodingError"):
        _backend(settings, handler).get_metrics(REST)


def test_user_agent_comes_from_settings(nctl_home: Path) -> None:
    settings = AppSettings(NCTL_HOME=str(nctl_home), user_agent="nctl-test/9", _env_file=None)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="uptime 1\n")

    _backend(settings, handler).get_metrics(REST)

    assert seen[0].headers["User-Agent"] == "nctl-test/9"
