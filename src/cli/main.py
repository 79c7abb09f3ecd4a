"""CLI principal (Typer).

Cada comando es una vista: parsea `key=value`, carga el contexto de red una
sola vez y delega en `core.services.views`. El fallo al cargar la red es fatal;
los fallos por target se renderizan inline y solo cambian el exit code cuando
el target era concreto.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import typer
from rich.console import Console

from adapters.chain_query import ChainQueryClient
from adapters.node_backend import HttpNodeBackend
from cli import doctor
from cli.arguments import (
    BalanceViewArgs,
    MetricsViewArgs,
    NodeViewArgs,
    UserViewArgs,
    parse_view_args,
)
from cli.ui_components import print_error
from core.config import AppSettings
from core.domain.account_type import AccountType
from core.domain.errors import NetworkNotFound
from core.log import configure_logging
from core.network_loader import load_network_context
from core.services import views
from core.services.address_resolver import AddressResolver
from core.services.fanout import FanoutReport

logger = logging.getLogger(__name__)

app = typer.Typer(
    no_args_is_help=True,
    help="Inspect a local NCTL test network by network/node/user ordinal.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _runtime(net: int, *, with_backend: bool = False, with_chain: bool = False) -> views.ViewRuntime:
    settings = AppSettings()
    try:
        network = load_network_context(net, settings)
    except NetworkNotFound as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc

    logger.info(
        "network #%d: %d nodes, %d users (%s)",
        network.net,
        network.node_count,
        network.user_count,
        network.path,
    )
    return views.ViewRuntime(
        resolver=AddressResolver(network, settings),
        console=_console,
        backend=HttpNodeBackend(settings) if with_backend else None,
        chain=ChainQueryClient(settings) if with_chain else None,
    )


def _finish(report: FanoutReport) -> None:
    if report.failed:
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Read-only views over a local NCTL network."""

    configure_logging("DEBUG" if verbose else AppSettings().log_level)


@app.command(name="node-metrics")
def node_metrics(
    args: Optional[List[str]] = typer.Argument(
        None, metavar="[net=N] [node=M|all] [metric=NAME|all]", show_default=False
    ),
) -> None:
    """Render node metrics (one metric line, or the raw body for metric=all)."""

    parsed = parse_view_args(MetricsViewArgs, args)
    runtime = _runtime(parsed.net, with_backend=True)
    _finish(views.view_node_metrics(runtime, node=parsed.node, metric=parsed.metric))


@app.command(name="node-status")
def node_status(
    args: Optional[List[str]] = typer.Argument(None, metavar="[net=N] [node=M|all]", show_default=False),
) -> None:
    """Render the info_get_status result of each node."""

    parsed = parse_view_args(NodeViewArgs, args)
    runtime = _runtime(parsed.net, with_backend=True)
    _finish(views.view_node_status(runtime, node=parsed.node))


@app.command(name="user-balance")
def user_balance(
    args: Optional[List[str]] = typer.Argument(
        None, metavar="[net=N] [node=M] [user=K|all]", show_default=False
    ),
) -> None:
    """Render user account balances, queried through node `node`."""

    parsed = parse_view_args(BalanceViewArgs, args)
    runtime = _runtime(parsed.net, with_chain=True)
    _finish(views.view_account_balance(runtime, node=parsed.node, user=parsed.user))


@app.command(name="validator-account-hash")
def validator_account_hash(
    args: Optional[List[str]] = typer.Argument(None, metavar="[net=N] [node=M|all]", show_default=False),
) -> None:
    """Render validator (node) account hashes."""

    parsed = parse_view_args(NodeViewArgs, args)
    runtime = _runtime(parsed.net)
    _finish(views.view_account_hash(runtime, account_type=AccountType.NODE, target=parsed.node))


@app.command(name="validator-secret-key-path")
def validator_secret_key_path(
    args: Optional[List[str]] = typer.Argument(None, metavar="[net=N] [node=M|all]", show_default=False),
) -> None:
    """Render paths to validator (node) secret keys."""

    parsed = parse_view_args(NodeViewArgs, args)
    runtime = _runtime(parsed.net)
    _finish(views.view_secret_key_path(runtime, account_type=AccountType.NODE, target=parsed.node))


@app.command(name="user-account-hash")
def user_account_hash(
    args: Optional[List[str]] = typer.Argument(None, metavar="[net=N] [user=K|all]", show_default=False),
) -> None:
    """Render user account hashes."""

    parsed = parse_view_args(UserViewArgs, args)
    runtime = _runtime(parsed.net)
    _finish(views.view_account_hash(runtime, account_type=AccountType.USER, target=parsed.user))


@app.command(name="user-secret-key-path")
def user_secret_key_path(
    args: Optional[List[str]] = typer.Argument(None, metavar="[net=N] [user=K|all]", show_default=False),
) -> None:
    """Render paths to user secret keys."""

    parsed = parse_view_args(UserViewArgs, args)
    runtime = _runtime(parsed.net)
    _finish(views.view_secret_key_path(runtime, account_type=AccountType.USER, target=parsed.user))


def run() -> None:
    app()
