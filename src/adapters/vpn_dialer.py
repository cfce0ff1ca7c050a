"""Marcadores VPN del sistema operativo.

- macOS: `scutil --nc start <vpn> --password <pw> --secret <secret>`
- resto (Windows): `rasdial.exe <vpn> <username> <pw>`

Una sola invocación, sin reintentos. La contraseña solo viaja como argumento
del proceso; nunca se escribe en disco.
"""

from __future__ import annotations

import shutil
import subprocess
import sys

from core.config import DialConfig
from core.domain.errors import DialError
from core.interfaces.dialer import VpnDialer


def _run(cmd: list[str]) -> int:
    try:
        result = subprocess.run(cmd, check=False)
    except FileNotFoundError as exc:
        raise DialError(f"{cmd[0]} not found on PATH. Is this the right platform?") from exc
    except OSError as exc:
        raise DialError(f"Could not run {cmd[0]}: {exc}") from exc
    return result.returncode


class ScutilDialer(VpnDialer):
    """Marca con `scutil --nc start` (macOS)."""

    executable = "scutil"

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def command(self, vpn_name: str, password: str) -> list[str]:
        return [
            self.executable,
            "--nc",
            "start",
            vpn_name,
            "--password",
            password,
            "--secret",
            self._secret,
        ]

    def dial(self, vpn_name: str, password: str) -> int:
        return _run(self.command(vpn_name, password))


class RasdialDialer(VpnDialer):
    """Marca con `rasdial.exe` (Windows)."""

    executable = "rasdial.exe"

    def __init__(self, username: str) -> None:
        self._username = username

    def command(self, vpn_name: str, password: str) -> list[str]:
        return [self.executable, vpn_name, self._username, password]

    def dial(self, vpn_name: str, password: str) -> int:
        return _run(self.command(vpn_name, password))


def dialer_for_config(config: DialConfig, platform: str | None = None) -> VpnDialer:
    """Elige el marcador de la plataforma y comprueba su credencial auxiliar."""

    platform = platform or sys.platform
    if platform == "darwin":
        if not config.secret:
            raise DialError("`secret` is required in the config file on macOS")
        return ScutilDialer(config.secret)

    if not config.username:
        raise DialError("`username` is required in the config file on this platform")
    return RasdialDialer(config.username)


def dialer_is_available(dialer: VpnDialer) -> bool:
    """True si el ejecutable del marcador está en el PATH."""

    executable = dialer.command("", "")[0]
    return shutil.which(executable) is not None


def dial(dialer: VpnDialer, vpn_name: str, password: str) -> None:
    """Marca y convierte un código de salida distinto de 0 en `DialError`."""

    exit_code = dialer.dial(vpn_name, password)
    if exit_code != 0:
        raise DialError(f"Process terminated with exit code {exit_code}", exit_code=exit_code)
