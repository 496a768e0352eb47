"""Configuration commands: view and persist audit settings."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import config
from .config_manager import load_audit_config, save_audit_config

console = Console()

config_app = typer.Typer(
    help="⚙️  Configuration — lookup timeout and concurrency.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@config_app.command("show")
def show_config():
    """Show the audit settings in effect."""
    settings = load_audit_config(config.CONFIG_FILE)

    table = Table(title="Audit settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="cyan")
    for key, value in settings.items():
        table.add_row(key, str(value))
    console.print(table)
    console.print(f"[dim]Config file: {config.CONFIG_FILE}[/dim]")


@config_app.command("set")
def set_config(
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.1, help="Per-lookup timeout in seconds."),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, max=256, help="Maximum lookups in flight."),
):
    """Persist audit settings to the config file."""
    if timeout is None and concurrency is None:
        raise typer.BadParameter("Nothing to set. Pass --timeout and/or --concurrency.")

    settings = save_audit_config(
        config.CONFIG_FILE,
        lookup_timeout=timeout,
        lookup_concurrency=concurrency,
    )
    typer.echo(
        f"Saved: lookup_timeout={settings['lookup_timeout']} "
        f"lookup_concurrency={settings['lookup_concurrency']}"
    )
