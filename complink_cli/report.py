"""Rendering and export helpers for scan results."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .auditor import summarize_levels
from .models import ScanResult


def _status_color(result: ScanResult) -> str:
    if result.total_issues == 0:
        return "green"
    if result.total_issues * 2 <= result.total_components:
        return "yellow"
    return "red"


def render_result(result: ScanResult, console: Console) -> None:
    """Print a summary panel followed by one row per issue."""
    color = _status_color(result)
    summary = (
        f"[bold]Frame:[/bold] {escape(result.frame_name)}\n"
        f"[bold]Instances:[/bold] {result.total_components}  "
        f"[bold]Linked:[/bold] {result.linked_count}  "
        f"[bold]Not linked:[/bold] [{color}]{result.total_issues}[/{color}]"
    )
    levels = summarize_levels(result)
    if levels:
        per_level = ", ".join(f"L{level}: {count}" for level, count in levels.items())
        summary += f"\n[bold]By level:[/bold] {per_level}"
    console.print(Panel(summary, title="Component link scan", border_style=color))

    if not result.issues:
        console.print("[green]✅ All component instances are linked to a library.[/green]")
        return

    table = Table(show_lines=False)
    table.add_column("Instance", style="bold")
    table.add_column("Id", style="cyan")
    table.add_column("Level", justify="right")
    table.add_column("Parent chain", style="dim")
    table.add_column("Parent issue", style="magenta")

    for issue in result.issues:
        table.add_row(
            escape("  " * issue.level + issue.name),
            issue.id,
            str(issue.level),
            escape(" › ".join(issue.parent_path)) or "—",
            issue.parent_id or "—",
        )
    console.print(table)


def export_json(result: ScanResult, output_file: Path) -> None:
    output_file.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
