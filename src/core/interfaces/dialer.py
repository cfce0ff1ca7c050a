"""Contrato del marcador VPN del sistema operativo.

Por qué Protocol:
- scutil (macOS) y rasdial (Windows) reciben argumentos distintos, pero la CLI
  solo necesita "construye el comando" y "marca".
- Permite sustituir el marcador en tests sin lanzar procesos reales.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class VpnDialer(Protocol):
    """Contrato mínimo para marcar una conexión VPN.

    Reglas de diseño:
    - `dial` es síncrono: una única invocación, sin reintentos.
    - Devuelve el código de salida del proceso.
    """

    def command(self, vpn_name: str, password: str) -> list[str]:
        """Argumentos del proceso a lanzar (el primero es el ejecutable)."""

        ...

    def dial(self, vpn_name: str, password: str) -> int:
        """Lanza el comando y devuelve su código de salida."""

        ...
