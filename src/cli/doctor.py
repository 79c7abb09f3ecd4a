"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from adapters.node_backend import HttpNodeBackend
from cli.arguments import NetworkArgs, parse_view_args
from cli.ui_components import build_doctor_table, status_label
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import NetworkNotFound, ViewError
from core.domain.models import NetworkContext
from core.interfaces.backend import NodeBackend
from core.network_loader import get_path_to_net_vars, load_network_context
from core.services.address_resolver import AddressResolver

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_status(backend: NodeBackend, rpc_address: str) -> tuple[bool, str]:
    try:
        result = backend.get_status(rpc_address)
    except ViewError as exc:
        return False, f"{exc.kind}: {exc}"
    if isinstance(result, dict):
        build = result.get("build_version") or result.get("api_version") or "?"
        return True, f"{rpc_address} (build {build})"
    return True, rpc_address


def _check_metrics(backend: NodeBackend, rest_address: str) -> tuple[bool, str]:
    try:
        body = backend.get_metrics(rest_address)
    except ViewError as exc:
        return False, f"{exc.kind}: {exc}"
    return True, f"{rest_address}/metrics ({len(body.splitlines())} lines)"


def diagnose(
    network: NetworkContext,
    resolver: AddressResolver,
    backend: NodeBackend,
) -> list[tuple[str, bool, str]]:
    """Checks por nodo: (nombre, ok, detalle). Best-effort, nunca lanza `ViewError`."""

    rows: list[tuple[str, bool, str]] = []
    for node in range(1, network.node_count + 1):
        ok, detail = _check_status(backend, resolver.resolve_node_rpc_address(node))
        rows.append((f"node #{node} rpc", ok, detail))
        ok, detail = _check_metrics(backend, resolver.resolve_node_rest_address(node))
        rows.append((f"node #{node} rest", ok, detail))
    return rows


@app.command()
def run(
    args: Optional[List[str]] = typer.Argument(None, metavar="[net=N]", show_default=False),
) -> None:
    """Run baseline diagnostics against one network."""

    settings = AppSettings()
    net = parse_view_args(NetworkArgs, args).net

    table = build_doctor_table(net)

    home_ok = settings.home.is_dir()
    table.add_row("NCTL home", status_label(home_ok), str(settings.home))

    try:
        network = load_network_context(net, settings)
    except NetworkNotFound as exc:
        table.add_row("Network vars", status_label(False), str(exc))
        _console.print(table)
        _console.print(
            "\n[yellow]Note:[/yellow] set NCTL_HOME (or run `doctor set-home PATH`) to the NCTL directory."
        )
        raise typer.Exit(code=1) from exc

    table.add_row("Network vars", status_label(True), str(get_path_to_net_vars(net, settings)))
    table.add_row("Nodes / users", "OK", f"{network.node_count} / {network.user_count}")

    resolver = AddressResolver(network, settings)
    for name, ok, detail in diagnose(network, resolver, HttpNodeBackend(settings)):
        table.add_row(name, status_label(ok), detail)

    _console.print(table)


@app.command(name="set-home")
def set_home(
    path: Path = typer.Argument(..., help="NCTL home directory (contains assets/)."),
) -> None:
    """Store NCTL_HOME in the user config .env."""

    resolved = path.expanduser().resolve()
    if not (resolved / "assets").is_dir():
        raise typer.BadParameter(f"{resolved} has no assets/ directory")

    env_path = write_user_env_vars({"NCTL_HOME": str(resolved)})
    _console.print(f"[green]Saved NCTL home to:[/green] {env_path}")
