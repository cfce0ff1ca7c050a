"""Página de la matriz: descarga + parseo a `MatrixGrid`.

La página publica 3 tablas (`table.randamNumbarWidth`) con 16 celdas cada una
(un `<p>` por celda). El orden de documento importa: tabla i, celda j.
"""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from adapters.http_client import fetch_text
from core.config import AppSettings
from core.domain.errors import ParseError, ShapeError
from core.domain.models import CELLS_PER_TABLE, TABLE_COUNT, MatrixGrid

DEFAULT_TABLE_SELECTOR = "table.randamNumbarWidth"
DEFAULT_CELL_SELECTOR = "p"

_DECIMAL_DIGITS = frozenset("0123456789")


def _parse_cell(text: str, *, table: int, cell: int) -> int:
    # Sin strip: el texto de la celda tiene que ser exactamente un dígito.
    if len(text) != 1 or text not in _DECIMAL_DIGITS:
        raise ParseError(table=table, cell=cell, text=text)
    return int(text)


def parse_matrix_html(
    html: str,
    *,
    table_selector: str = DEFAULT_TABLE_SELECTOR,
    cell_selector: str = DEFAULT_CELL_SELECTOR,
) -> MatrixGrid:
    """Extrae la matriz del HTML.

    Errores:
    - `ShapeError` si no hay exactamente 3 tablas o alguna no tiene 16 celdas.
    - `ParseError` si el texto de alguna celda no es un único dígito decimal.
    """

    soup = BeautifulSoup(html, "html.parser")

    tables = soup.select(table_selector)
    if len(tables) != TABLE_COUNT:
        raise ShapeError(what="tables", expected=TABLE_COUNT, actual=len(tables))

    grid: list[tuple[int, ...]] = []
    for table_index, table in enumerate(tables):
        cells = table.select(cell_selector)
        if len(cells) != CELLS_PER_TABLE:
            raise ShapeError(
                what="cells",
                expected=CELLS_PER_TABLE,
                actual=len(cells),
                table=table_index,
            )
        grid.append(
            tuple(
                _parse_cell(cell.get_text(), table=table_index, cell=cell_index)
                for cell_index, cell in enumerate(cells)
            )
        )

    return MatrixGrid(tables=tuple(grid))


async def fetch_matrix(
    url: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MatrixGrid:
    """Descarga la página y la parsea con los selectores de `settings`."""

    settings = settings or AppSettings()
    html = await fetch_text(url, settings=settings, transport=transport)
    return parse_matrix_html(
        html,
        table_selector=settings.table_selector,
        cell_selector=settings.cell_selector,
    )
