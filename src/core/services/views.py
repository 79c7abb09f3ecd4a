"""Orquestación de las vistas.

Cada vista combina las mismas piezas: el contexto de red ya cargado, el
resolver, el fan-out y el renderer. La CLI solo construye un `ViewRuntime` y
delega aquí; los tests hacen lo mismo con fakes de los backends y una
`Console` sobre un buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.console import Console

from core.domain.account_type import AccountType
from core.domain.errors import ViewError
from core.domain.models import All, One
from core.interfaces.backend import ChainQuery, NodeBackend
from core.services.address_resolver import AddressResolver
from core.services.fanout import FanoutReport, for_each_target
from core.services.renderer import (
    SEPARATOR,
    render_failure,
    render_metric,
    render_scalar,
    render_status,
)


@dataclass
class ViewRuntime:
    """Dependencias de una invocación (una red, una salida)."""

    resolver: AddressResolver
    console: Console
    backend: NodeBackend | None = None
    chain: ChainQuery | None = None

    @property
    def net(self) -> int:
        return self.resolver.network.net

    def emit(self, text: str) -> None:
        # Directo al stream: rich expandiría tabs y quitaría caracteres de control.
        self.console.file.write(text + "\n")
        self.console.file.flush()

    def failure_reporter(self, account_type: AccountType) -> Callable[[int, ViewError], None]:
        def report(ordinal: int, error: ViewError) -> None:
            self.emit(render_failure(self.net, account_type, ordinal, error))

        return report

    def require_backend(self) -> NodeBackend:
        if self.backend is None:
            raise RuntimeError("this view needs a node backend")
        return self.backend

    def require_chain(self) -> ChainQuery:
        if self.chain is None:
            raise RuntimeError("this view needs a chain query client")
        return self.chain


def view_node_metrics(runtime: ViewRuntime, *, node: One | All, metric: str) -> FanoutReport:
    backend = runtime.require_backend()

    def action(ordinal: int) -> None:
        rest_address = runtime.resolver.resolve_node_rest_address(ordinal)
        body = backend.get_metrics(rest_address)
        runtime.emit(render_metric(runtime.net, ordinal, body, metric))

    return for_each_target(
        node,
        runtime.resolver.network.node_count,
        action,
        runtime.failure_reporter(AccountType.NODE),
    )


def view_node_status(runtime: ViewRuntime, *, node: One | All) -> FanoutReport:
    backend = runtime.require_backend()
    fan_out_all = isinstance(node, All)

    def action(ordinal: int) -> None:
        if fan_out_all:
            runtime.emit(SEPARATOR)
        rpc_address = runtime.resolver.resolve_node_rpc_address(ordinal)
        result = backend.get_status(rpc_address)
        runtime.emit(render_status(runtime.net, ordinal, rpc_address, result))

    report = for_each_target(
        node,
        runtime.resolver.network.node_count,
        action,
        runtime.failure_reporter(AccountType.NODE),
    )
    if fan_out_all:
        runtime.emit(SEPARATOR)
    return report


def view_account_hash(runtime: ViewRuntime, *, account_type: AccountType, target: One | All) -> FanoutReport:
    def action(ordinal: int) -> None:
        account_hash = runtime.resolver.resolve_account_hash(account_type, ordinal)
        runtime.emit(render_scalar(runtime.net, account_type, ordinal, "account hash", account_hash))

    return for_each_target(
        target,
        runtime.resolver.network.count_for(account_type),
        action,
        runtime.failure_reporter(account_type),
    )


def view_secret_key_path(runtime: ViewRuntime, *, account_type: AccountType, target: One | All) -> FanoutReport:
    def action(ordinal: int) -> None:
        path = runtime.resolver.resolve_secret_key_path(account_type, ordinal)
        runtime.emit(render_scalar(runtime.net, account_type, ordinal, "secret key", path))

    return for_each_target(
        target,
        runtime.resolver.network.count_for(account_type),
        action,
        runtime.failure_reporter(account_type),
    )


def view_account_balance(runtime: ViewRuntime, *, node: int, user: One | All) -> FanoutReport:
    """Balance de las cuentas de usuario, consultado a través del nodo `node`.

    El nodo se valida por target: si está fuera de rango, cada usuario muestra
    el fallo en su propia línea.
    """

    chain = runtime.require_chain()

    def action(ordinal: int) -> None:
        account_hash = runtime.resolver.resolve_account_hash(AccountType.USER, ordinal)
        rpc_address = runtime.resolver.resolve_node_rpc_address(node)
        balance = chain.get_account_balance(rpc_address, account_hash)
        runtime.emit(render_scalar(runtime.net, AccountType.USER, ordinal, "balance", balance))

    return for_each_target(
        user,
        runtime.resolver.network.user_count,
        action,
        runtime.failure_reporter(AccountType.USER),
    )
