"""
FILE: mynd/cli/commands/config.py
PURPOSE: Settings commands (config get, config set, config ls)
"""

import json

import typer
from rich.table import Table

from ..app import config_app, console, run
from ...config import CONFIG_KEYS, get_config_path


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(CONFIG_KEYS)})"),
):
    """
    Print one setting.

    Example:
        mynd config get save_file_format
    """
    typer.echo(run("config_get", {"key": key}).data)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(CONFIG_KEYS)})"),
    value: str = typer.Argument(..., help="New value (empty string clears data_file)"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Change one setting.

    Changing save_file_format or data_file moves the list to the new file.

    Example:
        mynd config set save_file_format binary
        mynd config set data_file ~/Dropbox/todos.json
    """
    result = run("config_set", {"key": key, "value": value})

    if raw:
        typer.echo(result.data)
    else:
        console.print(f"[green]✓ {key} = {result.data or '(default)'}[/green]")


@config_app.command("ls")
def config_ls(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show all settings.

    Example:
        mynd config ls
    """
    values = {key: run("config_get", {"key": key}).data for key in CONFIG_KEYS}

    if json_output:
        typer.echo(json.dumps(values, indent=2))
        return

    if raw:
        for key, value in values.items():
            typer.echo(f"{key}={value}")
        return

    table = Table(title="Settings", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in values.items():
        table.add_row(key, value or "[dim](default)[/dim]")

    console.print(table)
    console.print(f"\n[dim]{get_config_path()}[/dim]")
