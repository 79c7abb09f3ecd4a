"""Argumentos `key=value` de las vistas.

Las vistas aceptan tokens libres (`net=2 node=all metric=uptime`), sin orden
fijo. Se parsean una sola vez aquí y se validan contra un modelo pydantic con
campos tipados y defaults; las claves desconocidas se ignoran.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

import typer
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict

from core.domain.models import All, One, TargetSelector, parse_selector

ArgsT = TypeVar("ArgsT", bound=BaseModel)


def split_key_values(tokens: Iterable[str] | None) -> dict[str, str]:
    """`["net=1", "node=all"]` -> `{"net": "1", "node": "all"}`.

    Tokens sin `=` se ignoran; si una clave se repite, gana la última. Un valor
    vacío (`node=`) equivale a no pasar la clave: aplica el default.
    """

    values: dict[str, str] = {}
    for token in tokens or []:
        if "=" not in token:
            continue
        key, value = token.split("=", 1)
        key = key.strip().lower()
        value = value.strip()
        if not key:
            continue
        if value:
            values[key] = value
        else:
            values.pop(key, None)
    return values


class NetworkArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    net: int = Field(default=1, ge=1, description="Ordinal de la red.")


class NodeViewArgs(NetworkArgs):
    node: TargetSelector = Field(default_factory=All, description="Nodo o `all`.")

    @field_validator("node", mode="before")
    @classmethod
    def _parse_node(cls, value: object) -> One | All:
        return parse_selector(value)


class MetricsViewArgs(NodeViewArgs):
    metric: str = Field(default="all", min_length=1, description="Nombre de métrica o `all`.")


class UserViewArgs(NetworkArgs):
    user: TargetSelector = Field(default_factory=All, description="Usuario o `all`.")

    @field_validator("user", mode="before")
    @classmethod
    def _parse_user(cls, value: object) -> One | All:
        return parse_selector(value)


class BalanceViewArgs(UserViewArgs):
    node: int = Field(default=1, description="Nodo a través del cual se consulta la cadena.")


def parse_view_args(model: type[ArgsT], tokens: Iterable[str] | None) -> ArgsT:
    """Valida los tokens contra `model`; un valor inválido es un error de uso."""

    try:
        return model.model_validate(split_key_values(tokens))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise typer.BadParameter(problems) from exc
