"""Typer-based CLI for auditing component library links in design files."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from . import __version__, config
from .auditor import LinkAuditor
from .cli_config import config_app
from .document import DesignDocument, load_document
from .errors import DocumentError, NodeNotFoundError
from .models import ScanResult
from .plugin import LOOKUP_MODES, DocumentSurface, PluginController
from .report import export_json, render_result

console = Console()

app = typer.Typer(
    help="🧩 complink — find component instances that are not linked to a shared library.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"complink v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
):
    """complink: audit design files for unlinked component instances."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _load(file: Path) -> DesignDocument:
    try:
        return load_document(file)
    except DocumentError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _check_editor(editor: str) -> str:
    if editor not in LOOKUP_MODES:
        raise typer.BadParameter(f"Editor must be one of: {', '.join(LOOKUP_MODES)}")
    return editor


@app.command("roots")
def list_roots(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Design file exported as JSON."),
):
    """List frames and components that can be scanned."""
    document = _load(file)
    roots = document.scan_roots()
    if not roots:
        typer.echo("No frames or components found.")
        raise typer.Exit(code=0)

    for node in roots:
        typer.echo(f"{node.id}  [{node.type}] {node.name}")


@app.command("scan")
def scan_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Design file exported as JSON."),
    node_id: str = typer.Argument(..., help="Id of the frame, component or component set to scan."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result payload as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the result to a JSON file."),
    timeout: float = typer.Option(config.LOOKUP_TIMEOUT, min=0.1, help="Per-lookup timeout in seconds."),
    concurrency: int = typer.Option(config.LOOKUP_CONCURRENCY, min=1, max=256, help="Maximum lookups in flight."),
    editor: str = typer.Option("figma", help="Host editor type: figma, figjam, slides, buzz."),
):
    """Scan a frame for component instances not linked to a library."""
    document = _load(file)
    node = document.get_node_by_id(node_id)
    if node is None:
        raise typer.BadParameter(str(NodeNotFoundError(node_id)))

    surface = DocumentSurface(document, selection=[node], editor_type=_check_editor(editor))
    auditor = LinkAuditor(document.resolve_main_component, timeout=timeout, concurrency=concurrency)
    controller = PluginController(surface, auditor)
    asyncio.run(controller.handle_message({"type": "scan-frame"}))

    message = surface.messages[-1]
    if "error" in message:
        typer.echo(f"❌ {message['error']}", err=True)
        raise typer.Exit(code=1)

    result = ScanResult.from_dict(message["result"])
    if output is not None:
        export_json(result, output)

    if as_json:
        typer.echo(json.dumps(message["result"], indent=2))
    else:
        render_result(result, console)
        if output is not None:
            typer.echo(f"Exported result to {output}")


@app.command("show")
def show_node(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Design file exported as JSON."),
    node_id: str = typer.Argument(..., help="Node id taken from a scan report."),
    editor: str = typer.Option("figma", help="Host editor type: figma, figjam, slides, buzz."),
):
    """Locate a node reported by an earlier scan."""
    document = _load(file)
    surface = DocumentSurface(document, editor_type=_check_editor(editor))
    controller = PluginController(surface, LinkAuditor(document.resolve_main_component))
    asyncio.run(controller.handle_message({"type": "select-component", "componentId": node_id}))

    if surface.revealed is None:
        error = surface.messages[-1]["error"] if surface.messages else NodeNotFoundError(node_id)
        typer.echo(f"❌ {error}", err=True)
        raise typer.Exit(code=1)

    node = surface.revealed
    typer.echo(f"{node.id}  [{node.type}] {node.name}")
    if node.has_children():
        typer.echo(f"Children: {len(node.children())}")


if __name__ == "__main__":
    app()
