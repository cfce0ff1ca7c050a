"""Configuración.

Dos capas:
- `AppSettings` (pydantic-settings): comportamiento de la herramienta (timeouts,
  User-Agent, selectores HTML, ruta del fichero de conexión). Se lee de env vars
  `WVPA_*` y de `.env`.
- `DialConfig`: la conexión VPN en sí (URL de la matriz, nombre de la VPN,
  credenciales auxiliares y la especificación de contraseña). Vive en un TOML
  por usuario y nunca contiene la contraseña derivada.
"""

from __future__ import annotations

import os
import sys
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, HttpUrl, ValidationError, field_serializer, field_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigError
from core.domain.models import PasswordSpec

CONFIG_FILENAME = "wvpa.toml"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "wvpa"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "wvpa"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "wvpa"
    return Path.home() / ".config" / "wvpa"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_default_config_path() -> Path:
    return get_user_config_dir() / CONFIG_FILENAME


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="WVPA_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout para descargar la matriz (segundos).",
    )
    user_agent: str = Field(
        default="wvpa/0.1",
        min_length=1,
        description="User-Agent para la descarga de la matriz.",
    )
    config_path: Path | None = Field(
        default=None,
        description="Ruta al TOML de conexión (por defecto, el del directorio de usuario).",
    )
    table_selector: str = Field(
        default="table.randamNumbarWidth",
        min_length=1,
        description="Selector CSS de cada tabla de la matriz.",
    )
    cell_selector: str = Field(
        default="p",
        min_length=1,
        description="Selector CSS de cada celda dentro de una tabla.",
    )


class DialConfig(BaseModel):
    """Contenido del TOML de conexión.

    `username` se usa con rasdial (Windows) y `secret` (shared secret L2TP) con
    scutil (macOS); la comprobación de cuál hace falta la hace el dialer.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    matrix_url: HttpUrl = Field(..., description="Página donde se publica la matriz.")
    vpn_name: str = Field(..., min_length=1, description="Nombre de la conexión VPN en el sistema.")
    username: str | None = Field(default=None, description="Usuario para rasdial.")
    secret: str | None = Field(default=None, description="Shared secret para scutil.")
    password: PasswordSpec = Field(..., description="Especificación de contraseña (no la contraseña).")

    @field_validator("password", mode="before")
    @classmethod
    def _decode_password(cls, value: Any) -> Any:
        if isinstance(value, str):
            return PasswordSpec.decode(value)
        return value

    @field_serializer("password")
    def _encode_password(self, value: PasswordSpec) -> str:
        return value.encode()


def resolve_config_path(explicit: Path | None = None, settings: AppSettings | None = None) -> Path:
    """Orden: argumento explícito, `WVPA_CONFIG_PATH`, directorio de usuario."""

    if explicit is not None:
        return explicit
    settings = settings or AppSettings()
    if settings.config_path is not None:
        return settings.config_path
    return get_default_config_path()


def load_dial_config(path: Path) -> DialConfig:
    """Lee y valida el TOML de conexión.

    Los errores de la especificación de contraseña (`DerivationError`) se
    propagan tal cual; el resto se convierte en `ConfigError`.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    try:
        return DialConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}:\n{exc}") from exc


_TOML_ESCAPES = {"\"": "\\\"", "\\": "\\\\", "\b": "\\b", "\t": "\\t", "\n": "\\n", "\f": "\\f", "\r": "\\r"}


def _toml_string(value: str) -> str:
    """Cadena básica TOML: escapa comillas, barra y todo carácter de control (incluido U+007F)."""

    out: list[str] = []
    for char in value:
        if char in _TOML_ESCAPES:
            out.append(_TOML_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\u{ord(char):04X}")
        else:
            out.append(char)
    return "\"" + "".join(out) + "\""


def write_dial_config(config: DialConfig, path: Path) -> Path:
    """Escribe el TOML de conexión (sobrescribe)."""

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json", exclude_none=True)

    lines = ["# wvpa connection config"]
    for key in ("matrix_url", "vpn_name", "username", "secret", "password"):
        if key in payload:
            lines.append(f"{key} = {_toml_string(str(payload[key]))}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
