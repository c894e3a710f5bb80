"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/parsers) y la CLI lean config de forma
  consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import TeapplixCredentials


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "teapplix-access"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "teapplix-access"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "teapplix-access"
    return Path.home() / ".config" / "teapplix-access"


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


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# teapplix-access user config (.env)"]
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
        env_prefix="TEAPPLIX_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    account_name: str | None = Field(
        default=None,
        description="Cuenta Teapplix (obligatoria para subir/descargar).",
    )
    user_name: str | None = Field(
        default=None,
        description="Usuario API usado en la URL de export.",
    )
    password: str | None = Field(
        default=None,
        description="Contraseña API usada en la URL de export.",
    )

    base_url: str = Field(
        default="https://www.teapplix.com",
        min_length=8,
        description="Host base de Teapplix.",
    )
    upload_path: str = Field(
        default="/h/{account}/ea/admin.php?Action=ReceiveInventory",
        min_length=1,
        description="Path de subida de inventario; `{account}` se sustituye.",
    )
    export_path: str = Field(
        default="/h/{account}/ea/export.php",
        min_length=1,
        description="Path del export de pedidos; `{account}` se sustituye.",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout del transporte por request (segundos).",
    )
    user_agent: str = Field(
        default="teapplix-access/0.1",
        min_length=1,
        description="User-Agent para las peticiones.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG incluye los payloads crudos).",
    )

    def credentials(self) -> TeapplixCredentials:
        """Construye las credenciales; falla (ValidationError) si no hay cuenta."""

        return TeapplixCredentials(
            account_name=self.account_name or "",
            user_name=self.user_name,
            password=self.password,
        )
