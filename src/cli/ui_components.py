"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Las vistas de datos escriben texto plano; las tablas Rich quedan para los
  comandos de diagnóstico.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text


def print_error(console: Console, message: str) -> None:
    """Mensaje de error para stderr, con prefijo legible."""

    console.print(Text.assemble(("error: ", "bold red"), message))


def build_doctor_table(net: int) -> Table:
    table = Table(title=f"NCTL Doctor :: network #{net}")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def status_label(ok: bool) -> str:
    return "OK" if ok else "FAIL"
