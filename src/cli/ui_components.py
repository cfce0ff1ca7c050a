"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import CoordinatePair, MatrixGrid, PasswordSpec


def print_banner(console: Console) -> None:
    title = Text("wvpa", style="bold cyan")
    subtitle = Text("VPN dial-in • password matrix", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_matrix_table(grid: MatrixGrid, *, highlight: set[CoordinatePair] | None = None) -> Table:
    """Una fila por tabla de la matriz, una columna por celda (hex)."""

    highlight = highlight or set()
    table = Table(title="Password Matrix")
    table.add_column("Table", style="cyan", no_wrap=True)
    for position in range(16):
        table.add_column(f"{position:x}", justify="center")

    for table_index, cells in enumerate(grid.rows()):
        row: list[str | Text] = [str(table_index)]
        for position, value in enumerate(cells):
            used = CoordinatePair(table=table_index, position=position) in highlight
            row.append(Text(str(value), style="bold yellow" if used else "white"))
        table.add_row(*row)
    return table


def build_spec_table(spec: PasswordSpec, *, digits: list[int] | None = None) -> Table:
    """Entradas de la especificación; con `digits`, también el dígito resultante."""

    table = Table(title="Password Specification")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Code", style="magenta")
    table.add_column("Table", style="cyan")
    table.add_column("Position", style="white")
    if digits is not None:
        table.add_column("Digit", style="yellow")

    for index, entry in enumerate(spec.entries):
        row = [str(index), entry.encode(), str(entry.table), str(entry.position)]
        if digits is not None:
            row.append(str(digits[index]))
        table.add_row(*row)
    return table


def build_spec_panel(spec: PasswordSpec, *, mask_suffix: bool = False) -> Panel:
    """Codificación normalizada; con `mask_suffix`, el sufijo se muestra como `*`."""

    suffix = "*" * len(spec.suffix) if mask_suffix else spec.suffix
    body = Text()
    body.append("Normalized: ", style="bold")
    body.append("".join(entry.encode() for entry in spec.entries) + suffix + "\n")
    body.append("Suffix length: ", style="bold")
    body.append(str(len(spec.suffix)))
    return Panel(body, title=Text("Specification", style="bold yellow"), border_style="yellow")
