"""Analyze command: exact distributions of a progression task."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ...analysis import (
    benchmark_probability,
    expected_value,
    find_percentile,
    generate_histograms,
)
from ...config import get_config
from ...core.errors import StatdistError, UnsupportedProgressionError
from ...core.models import LevelUp, save_histograms
from ..app import app, console
from ._loading import load_task


def _step_label(stat_change) -> str:
    if isinstance(stat_change, LevelUp):
        return "Level-Up"
    return stat_change.name or "Promotion"


@app.command("analyze")
def analyze_command(
    task_file: Path = typer.Argument(..., help="Progression task file (.yaml or .json)"),
    stat: Optional[str] = typer.Option(None, "--stat", "-s", help="Only show this stat"),
    benchmark: Optional[int] = typer.Option(
        None, "--benchmark", "-b", help="Show the probability of reaching this value"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write all snapshots as JSON"
    ),
) -> None:
    """Compute exact stat distributions after every stat change."""
    config = get_config()
    task = load_task(task_file)

    if stat is not None and stat not in task.character.stats:
        known = ", ".join(task.character.stats)
        console.print(f"[red]✗[/red] Unknown stat '{escape(stat)}' (known: {escape(known)})")
        raise typer.Exit(1)

    try:
        snapshots = generate_histograms(task.stat_changes, task.character)
    except UnsupportedProgressionError as e:
        console.print("[red]✗[/red] Progression can't be solved in closed form:")
        for issue in e.result.errors:
            console.print(f"  {escape(str(issue))}")
        raise typer.Exit(1)
    except StatdistError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if benchmark is None:
        benchmark = config.output.benchmark
    precision = config.output.precision
    labels = ["Start"] + [_step_label(change) for change in task.stat_changes]

    for key in [stat] if stat is not None else list(task.character.stats):
        table = Table(title=escape(f"{task.character.name or 'Character'} - {key}"))
        table.add_column("Step", justify="right")
        table.add_column("Change")
        table.add_column("Mean", justify="right")
        table.add_column("Median", justify="right")
        table.add_column("Range", justify="right")
        if benchmark is not None:
            table.add_column(f"P(>= {benchmark})", justify="right")

        for index, (label, snapshot) in enumerate(zip(labels, snapshots)):
            pmf = snapshot[key]
            row = [
                str(index),
                escape(label),
                f"{expected_value(pmf):.{precision}f}",
                str(find_percentile(pmf, 0.5)),
                f"{min(pmf)}-{max(pmf)}",
            ]
            if benchmark is not None:
                row.append(f"{benchmark_probability(pmf, benchmark):.{precision}f}")
            table.add_row(*row)

        console.print(table)

    if output is not None:
        save_histograms(snapshots, output)
        console.print(f"[green]✓[/green] Saved {len(snapshots)} snapshots to {escape(str(output))}")
