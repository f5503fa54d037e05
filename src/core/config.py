"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- La API key de OMDb se inyecta en los adaptadores en vez de vivir como
  constante global, así el Core se prueba sin red.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "popcorn"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "popcorn"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "popcorn"
    return Path.home() / ".config" / "popcorn"


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


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# popcorn user config (.env)"]
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
        env_prefix="POPCORN_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    omdb_api_key: str | None = Field(
        default=None,
        description="API key de OMDb (http://www.omdbapi.com/apikey.aspx).",
    )
    omdb_base_url: str = Field(
        default="http://www.omdbapi.com/",
        min_length=8,
        description="Endpoint del catálogo OMDb (búsqueda y detalle).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="popcorn/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones al catálogo.",
    )

    min_query_length: int = Field(
        default=3,
        ge=1,
        description="Longitud mínima de la query antes de consultar el catálogo.",
    )
    max_user_rating: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Escala máxima de la puntuación del usuario (estrellas).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
