"""Cargador del contexto de red.

Este módulo vive en `core/` porque:
- centraliza *dónde* persiste NCTL la configuración de cada red sin acoplarse
  a la CLI
- evita duplicar lógica de paths en resolvers y en `doctor`.

Layout esperado (generado por el bootstrap de NCTL, fuera de este proyecto):

    <home>/assets/net-<N>/vars
    <home>/assets/net-<N>/nodes/node-<M>/keys/{secret_key.pem,public_key_hex}
    <home>/assets/net-<N>/users/user-<K>/{secret_key.pem,public_key_hex}
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import AppSettings, parse_env_lines
from core.domain.account_type import AccountType
from core.domain.errors import NetworkNotFound
from core.domain.models import NetworkContext

logger = logging.getLogger(__name__)

NODE_COUNT_KEY = "NCTL_NET_NODE_COUNT"
USER_COUNT_KEY = "NCTL_NET_USER_COUNT"


def get_path_to_net(net: int, settings: AppSettings | None = None) -> Path:
    settings = settings or AppSettings()
    return settings.assets_dir / f"net-{net}"


def get_path_to_net_vars(net: int, settings: AppSettings | None = None) -> Path:
    return get_path_to_net(net, settings) / "vars"


def _read_count(net: int, variables: dict[str, str], key: str) -> int:
    raw = variables.get(key)
    if raw is None:
        raise NetworkNotFound(net, f"{key} is not defined")
    try:
        value = int(raw)
    except ValueError:
        raise NetworkNotFound(net, f"{key} is not an integer: {raw!r}") from None
    if value < 0:
        raise NetworkNotFound(net, f"{key} is negative: {value}")
    return value


def load_network_context(net: int, settings: AppSettings | None = None) -> NetworkContext:
    """Materializa el `NetworkContext` de la red `net`.

    Lógica:
    - Lee `<home>/assets/net-<net>/vars` (sin ejecutarlo: solo `KEY=VALUE`).
    - Exige `NCTL_NET_NODE_COUNT` y `NCTL_NET_USER_COUNT`.
    - Los códigos de tipo de cuenta son opcionales (`NCTL_ACCOUNT_TYPE_*`).

    Falla con `NetworkNotFound` si la red no tiene configuración usable.
    """

    settings = settings or AppSettings()
    vars_path = get_path_to_net_vars(net, settings)
    if not vars_path.is_file():
        raise NetworkNotFound(net, f"no vars file at {vars_path}")

    variables = parse_env_lines(vars_path.read_text(encoding="utf-8"))
    logger.debug("loaded %d variables from %s", len(variables), vars_path)

    codes = {
        account_type: variables.get(account_type.vars_key) or account_type.default_code
        for account_type in AccountType
    }

    return NetworkContext(
        net=net,
        path=vars_path.parent,
        node_count=_read_count(net, variables, NODE_COUNT_KEY),
        user_count=_read_count(net, variables, USER_COUNT_KEY),
        account_type_codes=codes,
    )
