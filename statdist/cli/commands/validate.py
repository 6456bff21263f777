"""Validate command: check a progression task against the feasibility gate."""

from pathlib import Path

import typer
from rich.markup import escape

from ...analysis import check_progression
from ..app import app, console
from ._loading import load_task


@app.command("validate")
def validate_command(
    task_file: Path = typer.Argument(..., help="Progression task file (.yaml or .json)"),
) -> None:
    """Check whether a progression can be solved in closed form."""
    task = load_task(task_file)
    result = check_progression(task.stat_changes, task.character)

    for issue in result.errors:
        console.print(f"[red]ERROR[/red] {escape(str(issue))}")
    for issue in result.warnings:
        console.print(f"[yellow]WARNING[/yellow] {escape(str(issue))}")

    if not result.valid:
        console.print(f"[red]✗[/red] {len(result.errors)} unsupported stat change(s)")
        raise typer.Exit(1)

    console.print(
        f"[green]✓[/green] Progression is valid ({len(task.stat_changes)} stat changes)"
    )
