"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los tres conceptos (matriz, coordenada, especificación) son valores
  inmutables que se validan una sola vez, en el borde de construcción.
- Una vez construidos, las búsquedas en la matriz son totales: no hay que
  comprobar rangos en cada uso.

Nota:
- Los validadores lanzan la taxonomía de `core.domain.errors` (no `ValueError`)
  para que el error llegue intacto a quien construye el modelo.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.errors import DigitError, FormatError, ParseError, RangeError, ShapeError

TABLE_COUNT = 3
CELLS_PER_TABLE = 16
ENTRY_COUNT = 8
ENCODED_WIDTH = 2 * ENTRY_COUNT

TABLE_RADIX = 10
POSITION_RADIX = 16

_DIGIT_VALUES = {char: value for value, char in enumerate("0123456789abcdef")}


def parse_digit(char: str, radix: int, *, index: int = 0) -> int:
    """Value of a single ASCII digit in `radix` (case-insensitive for hex)."""

    value = _DIGIT_VALUES.get(char.lower()) if len(char) == 1 else None
    if value is None or value >= radix:
        raise DigitError(char=char, radix=radix, index=index)
    return value


def check_range(field: str, value: int, count: int) -> int:
    """`value` si está en [0, count); si no, `RangeError`."""

    if not 0 <= value < count:
        raise RangeError(field=field, value=value, upper=count - 1)
    return value


class CoordinatePair(BaseModel):
    """Una búsqueda (tabla, celda) en la matriz."""

    model_config = ConfigDict(frozen=True, strict=True)

    table: int = Field(..., description="Índice de tabla, 0..2.")
    position: int = Field(..., description="Índice de celda dentro de la tabla, 0..15.")

    @field_validator("table")
    @classmethod
    def _check_table(cls, value: int) -> int:
        return check_range("table", value, TABLE_COUNT)

    @field_validator("position")
    @classmethod
    def _check_position(cls, value: int) -> int:
        return check_range("position", value, CELLS_PER_TABLE)

    def encode(self) -> str:
        # Tabla en base 10, posición en base 16: asimetría intencionada del formato.
        return f"{self.table}{self.position:x}"


class MatrixGrid(BaseModel):
    """Matriz publicada: 3 tablas de 16 dígitos decimales."""

    model_config = ConfigDict(frozen=True, strict=True)

    tables: tuple[tuple[int, ...], ...] = Field(
        ...,
        description="Tablas en orden de documento; cada una con sus celdas en orden.",
    )

    @field_validator("tables")
    @classmethod
    def _check_shape(cls, tables: tuple[tuple[int, ...], ...]) -> tuple[tuple[int, ...], ...]:
        if len(tables) != TABLE_COUNT:
            raise ShapeError(what="tables", expected=TABLE_COUNT, actual=len(tables))
        for table_index, cells in enumerate(tables):
            if len(cells) != CELLS_PER_TABLE:
                raise ShapeError(
                    what="cells",
                    expected=CELLS_PER_TABLE,
                    actual=len(cells),
                    table=table_index,
                )
            for cell_index, value in enumerate(cells):
                if not 0 <= value <= 9:
                    raise ParseError(table=table_index, cell=cell_index, text=str(value))
        return tables

    def get(self, coordinate: CoordinatePair) -> int:
        return self.tables[coordinate.table][coordinate.position]

    def rows(self) -> Iterator[tuple[int, ...]]:
        return iter(self.tables)


class PasswordSpec(BaseModel):
    """Especificación de contraseña: 8 coordenadas + sufijo literal.

    Formato de texto (ancho fijo):
    - caracteres [0, 16): 8 pares `(tabla_decimal, posición_hex)`
    - caracteres [16, fin): sufijo copiado tal cual
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[CoordinatePair, ...] = Field(
        ...,
        description="Coordenadas en el orden en que aparecen sus dígitos en la contraseña.",
    )
    suffix: str = Field(
        default="",
        description="Texto literal añadido al final de la contraseña.",
    )

    @field_validator("entries")
    @classmethod
    def _check_entries(cls, entries: tuple[CoordinatePair, ...]) -> tuple[CoordinatePair, ...]:
        if len(entries) != ENTRY_COUNT:
            raise ShapeError(what="coordinate pairs", expected=ENTRY_COUNT, actual=len(entries))
        return entries

    @classmethod
    def decode(cls, text: str) -> PasswordSpec:
        if len(text) < ENCODED_WIDTH:
            raise FormatError(text_length=len(text), required=ENCODED_WIDTH)

        head, suffix = text[:ENCODED_WIDTH], text[ENCODED_WIDTH:]
        entries: list[CoordinatePair] = []
        for index in range(0, ENCODED_WIDTH, 2):
            # La tabla se valida entera antes de leer la posición.
            table = check_range("table", parse_digit(head[index], TABLE_RADIX, index=index), TABLE_COUNT)
            position = parse_digit(head[index + 1], POSITION_RADIX, index=index + 1)
            entries.append(CoordinatePair(table=table, position=position))
        return cls(entries=tuple(entries), suffix=suffix)

    def encode(self) -> str:
        return "".join(entry.encode() for entry in self.entries) + self.suffix

    def __str__(self) -> str:
        return self.encode()
