import pytest

from adapters.matrix_page import parse_matrix_html
from core.domain.models import CoordinatePair, MatrixGrid, PasswordSpec
from core.services.password import derive_password, explain_password


def test_all_zero_matrix(matrix_html) -> None:
    grid = parse_matrix_html(matrix_html([[0] * 16] * 3))
    spec = PasswordSpec.decode("0000000000000000XYZ")
    assert derive_password(spec, grid) == "00000000XYZ"


def test_last_cell_of_last_table() -> None:
    tables = [[0] * 16 for _ in range(3)]
    tables[2][15] = 7
    grid = MatrixGrid(tables=tuple(tuple(cells) for cells in tables))
    spec = PasswordSpec.decode("2f00000000000000")
    assert derive_password(spec, grid)[0] == "7"


def test_digits_follow_entry_order(counting_grid: MatrixGrid) -> None:
    # table 0 -> p % 10, table 1 -> (16 + p) % 10, table 2 -> (32 + p) % 10
    spec = PasswordSpec.decode("0010201f2f0a1b2c!")
    assert derive_password(spec, counting_grid) == "06217074!"


@pytest.mark.parametrize("suffix", ["", "a", "long suffix ñ"])
def test_length_is_eight_plus_suffix(counting_grid: MatrixGrid, suffix: str) -> None:
    spec = PasswordSpec.decode("0102020100020001" + suffix)
    password = derive_password(spec, counting_grid)
    assert len(password) == 8 + len(suffix)
    assert password.endswith(suffix)
    assert password[:8].isdigit()


def test_derivation_is_deterministic(counting_grid: MatrixGrid) -> None:
    spec = PasswordSpec.decode("2f2e2d2c2b2a2928tail")
    assert derive_password(spec, counting_grid) == derive_password(spec, counting_grid)


def test_explain_lists_each_lookup(counting_grid: MatrixGrid) -> None:
    spec = PasswordSpec.decode("0010201f2f0a1b2c")
    lookups = explain_password(spec, counting_grid)
    assert lookups[0] == (CoordinatePair(table=0, position=0), 0)
    assert lookups[2] == (CoordinatePair(table=2, position=0), 2)
    assert "".join(str(digit) for _, digit in lookups) == derive_password(spec, counting_grid)
