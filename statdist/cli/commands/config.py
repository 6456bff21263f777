"""Config command: show or change settings."""

from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ...config import get_config, get_config_path, set_config_value
from ..app import app, console


@app.command("config")
def config_command(
    action: str = typer.Argument(..., help="show | set"),
    key: Optional[str] = typer.Argument(None, help="Dotted setting, e.g. engine.error_bound"),
    value: Optional[str] = typer.Argument(None, help="New value"),
) -> None:
    """Show or change configuration."""
    if action == "show":
        config = get_config()
        for title, section in (("Engine", config.engine), ("Output", config.output)):
            table = Table(title=title)
            table.add_column("Setting")
            table.add_column("Value")
            for name, setting in section.model_dump().items():
                table.add_row(name, str(setting))
            console.print(table)
        console.print(f"Config file: {escape(str(get_config_path()))}")
        return

    if action == "set":
        if key is None or value is None:
            console.print("[red]✗[/red] Usage: statdist config set KEY VALUE")
            raise typer.Exit(1)
        try:
            set_config_value(key, value)
        except KeyError:
            console.print(f"[red]✗[/red] Unknown key: {escape(key)}")
            raise typer.Exit(1)
        except ValueError as e:
            console.print(f"[red]✗[/red] {escape(str(e))}")
            raise typer.Exit(1)
        console.print(f"[green]✓[/green] Set {escape(key)} = {escape(value)}")
        return

    console.print(f"[red]✗[/red] Unknown action: {escape(action)} (expected show or set)")
    raise typer.Exit(1)
