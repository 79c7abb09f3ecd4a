"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que resolvers y adaptadores HTTP lean host/puertos de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "nctl-views"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "nctl-views"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "nctl-views"
    return Path.home() / ".config" / "nctl-views"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def parse_env_lines(text: str) -> dict[str, str]:
    """Parsea líneas `KEY=VALUE` estilo shell.

    Acepta el prefijo `export ` (ficheros `vars` de NCTL) y comillas simples o
    dobles alrededor del valor. Comentarios y líneas sin `=` se ignoran.
    """

    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# nctl-views user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/resolvers/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="NCTL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    home: Path = Field(
        default_factory=Path.cwd,
        validation_alias=AliasChoices("NCTL", "NCTL_HOME"),
        description="Directorio home de NCTL (los assets viven en <home>/assets).",
    )
    node_host: str = Field(
        default="localhost",
        min_length=1,
        description="Host en el que escuchan todos los nodos de la red local.",
    )
    base_port_rpc: int = Field(
        default=40000,
        ge=1,
        le=65535,
        description="Puerto base del servidor JSON-RPC.",
    )
    base_port_rest: int = Field(
        default=50000,
        ge=1,
        le=65535,
        description="Puerto base del servidor REST (métricas).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="nctl-views/0.1",
        min_length=1,
        description="User-Agent para peticiones a los nodos.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )

    @property
    def assets_dir(self) -> Path:
        return self.home / "assets"
