"""Fan-out sobre ordinales.

Una única abstracción compartida por todas las vistas: `All` recorre
`1..count` en orden ascendente y de forma secuencial; `One(k)` ejecuta la
acción una sola vez con `k`, sin clamp (el rango lo valida el resolver).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from core.domain.errors import ViewError
from core.domain.models import All, One

logger = logging.getLogger(__name__)


@dataclass
class TargetFailure:
    ordinal: int
    error: ViewError


@dataclass
class FanoutReport:
    """Resultado de un fan-out: cuántos targets se completaron y cuáles fallaron."""

    selector: One | All
    completed: list[int] = field(default_factory=list)
    failures: list[TargetFailure] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """True si un target concreto (`One`) falló.

        Un `All` con fallos parciales no se considera fallido.
        """

        return isinstance(self.selector, One) and bool(self.failures)


def iter_ordinals(selector: One | All, count: int) -> list[int]:
    if isinstance(selector, All):
        return list(range(1, count + 1))
    return [selector.ordinal]


def for_each_target(
    selector: One | All,
    count: int,
    action: Callable[[int], None],
    on_error: Callable[[int, ViewError], None] | None = None,
) -> FanoutReport:
    """Ejecuta `action(i)` por cada target del selector.

    Un `ViewError` en un target se entrega a `on_error` y la iteración sigue;
    cualquier otra excepción se propaga.
    """

    report = FanoutReport(selector=selector)
    for ordinal in iter_ordinals(selector, count):
        try:
            action(ordinal)
        except ViewError as exc:
            logger.debug("target #%d failed (%s): %s", ordinal, exc.kind, exc)
            report.failures.append(TargetFailure(ordinal=ordinal, error=exc))
            if on_error:
                on_error(ordinal, exc)
            continue
        report.completed.append(ordinal)
    return report
