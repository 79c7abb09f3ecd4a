"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y modelos inmutables (`frozen`) sin acoplar el
  Core a librerías de I/O.
- El contexto de red se materializa una vez por invocación y se pasa explícito
  a cada resolver/vista; no hay estado global.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.account_type import AccountType


class NetworkContext(BaseModel):
    """Parámetros de una red NCTL, leídos de su fichero `vars`.

    Por qué existe:
    - Sustituye el `source` de variables de shell por un valor inmutable.
    - Es el único sitio donde viven `node_count`/`user_count` durante una vista.
    """

    model_config = ConfigDict(frozen=True)

    net: int = Field(
        ...,
        ge=1,
        description="Ordinal de la red.",
    )
    path: Path = Field(
        ...,
        description="Directorio de assets de la red (<home>/assets/net-<net>).",
    )
    node_count: int = Field(
        ...,
        ge=0,
        description="Número de nodos configurados.",
    )
    user_count: int = Field(
        ...,
        ge=0,
        description="Número de usuarios configurados.",
    )
    account_type_codes: dict[AccountType, str] = Field(
        default_factory=lambda: {t: t.default_code for t in AccountType},
        description="Código por tipo de cuenta usado al derivar rutas de claves.",
    )

    def count_for(self, account_type: AccountType) -> int:
        if account_type is AccountType.NODE:
            return self.node_count
        return self.user_count

    def code_for(self, account_type: AccountType) -> str:
        return self.account_type_codes.get(account_type, account_type.default_code)


class All(BaseModel):
    """Selector: todas las entidades `1..count`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["all"] = "all"

    def __str__(self) -> str:
        return "all"


class One(BaseModel):
    """Selector: un único ordinal (sin clamp; el rango lo comprueba el resolver)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["one"] = "one"
    ordinal: int

    def __str__(self) -> str:
        return str(self.ordinal)


TargetSelector = Annotated[Union[One, All], Field(discriminator="kind")]


def parse_selector(value: object) -> One | All:
    """Convierte `"all"`, `"3"` o `3` en un selector tipado.

    Lanza `ValueError` si el valor no es `all` ni un entero.
    """

    if isinstance(value, (One, All)):
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid selector: {value!r}")
    if isinstance(value, int):
        return One(ordinal=value)
    text = str(value).strip()
    if text.lower() == "all":
        return All()
    try:
        return One(ordinal=int(text))
    except ValueError:
        raise ValueError(f"expected an ordinal or 'all', got {text!r}") from None
