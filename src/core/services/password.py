"""Derivación de la contraseña.

Función pura: especificación + matriz -> contraseña. No hay caso de error:
las coordenadas ya vienen validadas desde su construcción.
"""

from __future__ import annotations

from core.domain.models import CoordinatePair, MatrixGrid, PasswordSpec


def derive_password(spec: PasswordSpec, grid: MatrixGrid) -> str:
    """Concatena los 8 dígitos en orden de entrada y añade el sufijo."""

    digits = "".join(str(grid.get(entry)) for entry in spec.entries)
    return f"{digits}{spec.suffix}"


def explain_password(spec: PasswordSpec, grid: MatrixGrid) -> list[tuple[CoordinatePair, int]]:
    """Búsquedas individuales, en orden de entrada.

    Los dígitos son parte de la contraseña: quien los muestre debe ocultar el sufijo.
    """

    return [(entry, grid.get(entry)) for entry in spec.entries]
