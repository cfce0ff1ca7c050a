"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import sys

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.matrix_page import fetch_matrix
from adapters.vpn_dialer import dialer_for_config, dialer_is_available
from cli.ui_components import print_banner
from core.config import AppSettings, DialConfig, load_dial_config, resolve_config_path, write_dial_config
from core.domain.errors import WvpaError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="wvpa Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    path = resolve_config_path(None, settings)
    config: DialConfig | None = None
    try:
        config = load_dial_config(path)
        table.add_row("Config file", "OK", escape(str(path)))
    except WvpaError as exc:
        table.add_row("Config file", "FAIL", escape(str(exc)))

    if config is not None:
        try:
            asyncio.run(fetch_matrix(str(config.matrix_url), settings=settings))
            table.add_row("Matrix page", "OK", escape(str(config.matrix_url)))
        except WvpaError as exc:
            table.add_row("Matrix page", "FAIL", escape(str(exc)))

        try:
            dialer = dialer_for_config(config)
            ok_dialer = dialer_is_available(dialer)
            executable = dialer.command(config.vpn_name, "")[0]
            table.add_row("Dial command", "OK" if ok_dialer else "FAIL", f"{executable} on PATH: {ok_dialer}")
        except WvpaError as exc:
            table.add_row("Dial command", "FAIL", escape(str(exc)))
    else:
        table.add_row("Matrix page", "SKIPPED", "No valid config")
        table.add_row("Dial command", "SKIPPED", "No valid config")

    _console.print(table)

    if config is None:
        _console.print("\n[yellow]Note:[/yellow] Run `wvpa doctor setup` to create the config file.")


@app.command()
def setup() -> None:
    """Interactive setup (stores the connection config in the user config dir)."""

    settings = AppSettings()
    path = resolve_config_path(None, settings)

    matrix_url = typer.prompt("Matrix page URL").strip()
    vpn_name = typer.prompt("VPN connection name").strip()

    values: dict[str, str] = {"matrix_url": matrix_url, "vpn_name": vpn_name}
    if sys.platform == "darwin":
        values["secret"] = typer.prompt("Shared secret", hide_input=True).strip()
    else:
        values["username"] = typer.prompt("Username").strip()

    values["password"] = typer.prompt("Password specification", hide_input=True)
    try:
        config = DialConfig.model_validate(values)
    except (WvpaError, ValidationError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    written = write_dial_config(config, path)
    _console.print(f"[green]Saved config to:[/green] {escape(str(written))}")
