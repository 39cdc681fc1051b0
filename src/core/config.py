"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el cliente Ackee y los servicios lean config de forma consistente.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Iterable

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.ranges import EventListType, RangeInput


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "ackee-summary"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ackee-summary"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ackee-summary"
    return Path.home() / ".config" / "ackee-summary"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(
    values: dict[str, str | None],
    env_path: Path | None = None,
    *,
    unset: Iterable[str] = (),
) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes se conservan; un valor `None` no pisa lo guardado.
    Las claves de `unset` se eliminan del archivo (p.ej. un token viejo que
    taparía las credenciales nuevas).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})
    for key in unset:
        existing.pop(key, None)

    lines = ["# ackee-summary user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACKEE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    server: str | None = Field(
        default=None,
        description="URL base del servidor Ackee (p.ej. https://ackee.example.com).",
    )
    username: str | None = Field(
        default=None,
        description="Usuario para emitir un token vía `createToken`.",
    )
    password: str | None = Field(
        default=None,
        description="Contraseña asociada a `username`.",
    )
    token: str | None = Field(
        default=None,
        description="Token permanente ya emitido; si existe no se hace login.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="ackee-summary/0.1",
        min_length=1,
        description="User-Agent para peticiones al API.",
    )

    default_range: RangeInput = Field(
        default=RangeInput.LAST_7_DAYS,
        description="Rango por defecto para el resumen.",
    )
    default_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Cantidad de entradas por categoría (pages, referrers, ...).",
    )
    default_event_type: EventListType = Field(
        default=EventListType.TOTAL,
        description="Tipo de lista de eventos (TOTAL/AVERAGE).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )


def setup_logging(level: str | None = None) -> None:
    """Configura logging estructurado para la CLI.

    La salida va a stderr para no mezclarse con `--json`.
    """

    name = (level or AppSettings().log_level).upper()
    log_level = getattr(logging, name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
