"""CLI principal (Typer).

Flujo de `dial`:
config TOML -> descarga de la matriz -> derivación -> marcador del SO.

Los errores de la aplicación (`WvpaError`) se muestran en rojo por stderr y
terminan el proceso con código distinto de 0.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.matrix_page import fetch_matrix
from adapters.vpn_dialer import dial as dial_vpn
from adapters.vpn_dialer import dialer_for_config
from cli import doctor
from cli.ui_components import build_matrix_table, build_spec_panel, build_spec_table
from core.config import AppSettings, DialConfig, load_dial_config, resolve_config_path
from core.domain.errors import DialError, WvpaError
from core.domain.models import MatrixGrid, PasswordSpec
from core.services.password import derive_password, explain_password

app = typer.Typer(no_args_is_help=True, help="Dial a VPN whose password is derived from a published matrix.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

_CONFIG_ARG_HELP = "Path to wvpa.toml (default: WVPA_CONFIG_PATH or the user config dir)."


def _fail(exc: WvpaError, exit_code: int = 1) -> NoReturn:
    _err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    raise typer.Exit(code=exit_code)


def _status(verbose: bool, message: str) -> None:
    if verbose:
        _err_console.print(f"[dim]{escape(message)}[/dim]")


def _load(config_path: Path | None, settings: AppSettings, verbose: bool) -> DialConfig:
    path = resolve_config_path(config_path, settings)
    _status(verbose, f"Config: {path}")
    return load_dial_config(path)


def _fetch(config: DialConfig, settings: AppSettings, verbose: bool) -> MatrixGrid:
    _status(verbose, f"Fetching matrix from {config.matrix_url}")
    return asyncio.run(fetch_matrix(str(config.matrix_url), settings=settings))


@app.command()
def dial(
    config_path: Optional[Path] = typer.Argument(None, help=_CONFIG_ARG_HELP),
    print_password: bool = typer.Option(
        False,
        "--print-password",
        "-p",
        help="Print the derived password instead of dialing.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress on stderr."),
) -> None:
    """Derive the password from the current matrix and dial the VPN."""

    settings = AppSettings()
    try:
        config = _load(config_path, settings, verbose)
        grid = _fetch(config, settings, verbose)
        password = derive_password(config.password, grid)

        if print_password:
            typer.echo(password)
            return

        dialer = dialer_for_config(config)
        _status(verbose, f"Dialing {config.vpn_name}")
        dial_vpn(dialer, config.vpn_name, password)
    except DialError as exc:
        _fail(exc, exc.exit_code or 1)
    except WvpaError as exc:
        _fail(exc)

    _status(verbose, "Done")


@app.command()
def matrix(
    config_path: Optional[Path] = typer.Argument(None, help=_CONFIG_ARG_HELP),
    highlight: bool = typer.Option(
        False,
        "--highlight",
        help="Highlight the cells used by the configured password specification.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress on stderr."),
) -> None:
    """Fetch the published matrix and show it."""

    settings = AppSettings()
    try:
        config = _load(config_path, settings, verbose)
        grid = _fetch(config, settings, verbose)
    except WvpaError as exc:
        _fail(exc)

    used = set(config.password.entries) if highlight else None
    _console.print(build_matrix_table(grid, highlight=used))


@app.command()
def spec(
    text: Optional[str] = typer.Argument(
        None,
        help="Password specification to decode (default: the one in the config file).",
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_ARG_HELP),
    explain: bool = typer.Option(
        False,
        "--explain",
        help="Fetch the matrix and show the digit each entry resolves to.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress on stderr."),
) -> None:
    """Decode a password specification and show its entries."""

    settings = AppSettings()
    try:
        config: DialConfig | None = None
        if text is None or explain:
            config = _load(config_path, settings, verbose)
        password_spec = PasswordSpec.decode(text) if text is not None else config.password

        digits: list[int] | None = None
        if explain:
            grid = _fetch(config, settings, verbose)
            digits = [digit for _, digit in explain_password(password_spec, grid)]
    except WvpaError as exc:
        _fail(exc)

    _console.print(build_spec_table(password_spec, digits=digits))
    _console.print(build_spec_panel(password_spec, mask_suffix=explain))


def run() -> None:
    app()
