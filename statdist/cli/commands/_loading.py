"""Task loading shared by the CLI commands."""

from pathlib import Path

import typer
import yaml
from rich.markup import escape
from pydantic import ValidationError

from ...core.models import ProgressionTask
from ..app import console


def load_task(task_file: Path) -> ProgressionTask:
    """Load a task file or exit with a readable error."""
    try:
        return ProgressionTask.from_file(task_file)
    except FileNotFoundError:
        console.print(f"[red]✗[/red] File not found: {escape(str(task_file))}")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid task file {escape(str(task_file))}:")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"  {escape(location)}: {escape(error['msg'])}")
        raise typer.Exit(1)
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)
