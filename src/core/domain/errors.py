"""Errores del dominio.

Por qué una jerarquía propia:
- Los adaptadores traducen errores de httpx/filesystem a estos tipos, así el
  fan-out puede aislar fallos por target sin conocer librerías de I/O.
- `kind` da una etiqueta estable para logs y para el render inline.
"""

from __future__ import annotations


class ViewError(Exception):
    """Base de todos los fallos esperables de una vista."""

    kind = "error"


class NotFound(ViewError):
    kind = "not-found"


class NetworkNotFound(NotFound):
    """No hay configuración persistida (o usable) para la red."""

    def __init__(self, net: int, reason: str) -> None:
        super().__init__(f"network #{net}: {reason}")
        self.net = net


class KeyMaterialNotFound(NotFound):
    """No existe material de claves (o no es usable) para la cuenta."""


class OutOfRange(ViewError):
    """El ordinal no está en `1..count` para la red."""

    kind = "out-of-range"

    def __init__(self, entity: str, ordinal: int, count: int) -> None:
        super().__init__(f"{entity} ordinal {ordinal} out of range (1..{count})")
        self.entity = entity
        self.ordinal = ordinal
        self.count = count


class Unreachable(ViewError):
    """El endpoint del nodo no respondió (fallo de transporte)."""

    kind = "unreachable"


class BadResponse(ViewError):
    """El nodo respondió, pero con un payload no esperado."""

    kind = "bad-response"
