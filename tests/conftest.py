from __future__ import annotations

from typing import Callable, Sequence

import pytest

from core.domain.models import MatrixGrid

MatrixHtml = Callable[..., str]


def _render_matrix_html(
    tables: Sequence[Sequence[object]],
    *,
    table_class: str = "randamNumbarWidth",
    extra: str = "",
) -> str:
    blocks = []
    for cells in tables:
        rows = "".join(f"<td><p>{cell}</p></td>" for cell in cells)
        blocks.append(f'<table class="{table_class}"><tr>{rows}</tr></table>')
    return f"<html><body>{extra}{''.join(blocks)}</body></html>"


@pytest.fixture
def matrix_html() -> MatrixHtml:
    return _render_matrix_html


@pytest.fixture
def counting_tables() -> list[list[int]]:
    # table t, cell p -> (t * 16 + p) % 10
    return [[(t * 16 + p) % 10 for p in range(16)] for t in range(3)]


@pytest.fixture
def counting_grid(counting_tables: list[list[int]]) -> MatrixGrid:
    return MatrixGrid(tables=tuple(tuple(cells) for cells in counting_tables))


@pytest.fixture
def zero_grid() -> MatrixGrid:
    return MatrixGrid(tables=((0,) * 16,) * 3)
