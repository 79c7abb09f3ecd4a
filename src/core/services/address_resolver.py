"""Resolución de ordinales a recursos concretos.

Traduce `(red, nodo)` a endpoints RPC/REST y `(red, tipo de cuenta, ordinal)`
a rutas de claves y account hashes. Todo es determinista: mismo contexto y
misma configuración producen siempre las mismas direcciones.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from core.config import AppSettings
from core.domain.account_type import AccountType
from core.domain.errors import KeyMaterialNotFound, OutOfRange
from core.domain.models import NetworkContext

logger = logging.getLogger(__name__)

SECRET_KEY_FILENAME = "secret_key.pem"
PUBLIC_KEY_FILENAME = "public_key_hex"

# Tag (primer byte de `public_key_hex`) -> nombre del algoritmo en el preimage.
_KEY_ALGORITHMS: dict[str, tuple[str, int]] = {
    "01": ("ed25519", 32),
    "02": ("secp256k1", 33),
}


def account_hash_from_public_key_hex(public_key_hex: str) -> str:
    """Deriva `account-hash-<hex>` a partir de un `public_key_hex` con tag.

    Preimage: nombre del algoritmo en minúsculas, un byte cero y los bytes de
    la clave; digest BLAKE2b de 32 bytes.
    """

    text = public_key_hex.strip().lower()
    tag, body = text[:2], text[2:]
    if tag not in _KEY_ALGORITHMS:
        raise ValueError(f"unknown public key tag {tag!r}")
    algorithm, size = _KEY_ALGORITHMS[tag]
    key_bytes = bytes.fromhex(body)
    if len(key_bytes) != size:
        raise ValueError(f"{algorithm} public key must be {size} bytes, got {len(key_bytes)}")

    digest = hashlib.blake2b(digest_size=32)
    digest.update(algorithm.encode("ascii"))
    digest.update(b"\x00")
    digest.update(key_bytes)
    return f"account-hash-{digest.hexdigest()}"


class AddressResolver:
    """Resuelve direcciones para una red concreta.

    El contexto se recibe explícito y es inmutable; el resolver no guarda nada
    más allá de la configuración de host/puertos.
    """

    def __init__(self, network: NetworkContext, settings: AppSettings | None = None) -> None:
        self._network = network
        self._settings = settings or AppSettings()

    @property
    def network(self) -> NetworkContext:
        return self._network

    def check_ordinal(self, account_type: AccountType, ordinal: int) -> None:
        count = self._network.count_for(account_type)
        if ordinal < 1 or ordinal > count:
            raise OutOfRange(account_type.label(), ordinal, count)

    def _node_port(self, base_port: int, node: int) -> int:
        self.check_ordinal(AccountType.NODE, node)
        return base_port + self._network.net * 100 + node

    def resolve_node_rpc_address(self, node: int) -> str:
        port = self._node_port(self._settings.base_port_rpc, node)
        return f"http://{self._settings.node_host}:{port}/rpc"

    def resolve_node_rpc_address_for_curl(self, node: int) -> str:
        port = self._node_port(self._settings.base_port_rpc, node)
        return f"{self._settings.node_host}:{port}/rpc"

    def resolve_node_rest_address(self, node: int) -> str:
        port = self._node_port(self._settings.base_port_rest, node)
        return f"http://{self._settings.node_host}:{port}"

    def resolve_key_directory(self, account_type: AccountType, ordinal: int) -> Path:
        """Directorio con el material de claves de la cuenta (exista o no)."""

        self.check_ordinal(account_type, ordinal)
        code = self._network.code_for(account_type)
        if account_type is AccountType.NODE:
            return self._network.path / "nodes" / f"{code}-{ordinal}" / "keys"
        return self._network.path / "users" / f"{code}-{ordinal}"

    def resolve_secret_key_path(self, account_type: AccountType, ordinal: int) -> Path:
        path = self.resolve_key_directory(account_type, ordinal) / SECRET_KEY_FILENAME
        if not path.is_file():
            raise KeyMaterialNotFound(f"no secret key at {path}")
        return path

    def resolve_account_hash(self, account_type: AccountType, ordinal: int) -> str:
        path = self.resolve_key_directory(account_type, ordinal) / PUBLIC_KEY_FILENAME
        if not path.is_file():
            raise KeyMaterialNotFound(f"no public key at {path}")
        try:
            account_hash = account_hash_from_public_key_hex(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            raise KeyMaterialNotFound(f"unusable public key at {path}: {exc}") from exc
        logger.debug("%s #%d -> %s", account_type.label(), ordinal, account_hash)
        return account_hash
