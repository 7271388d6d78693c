"""
FILE: mynd/cli/commands/ordering.py
PURPOSE: Reordering commands (up, down, below)
NOTES:
  - Moves that change nothing (first item up, already below) succeed silently
"""

import typer

from ..app import app, print_todos, resolve_ref, run


def _show(result, json_output: bool, raw: bool) -> None:
    if json_output:
        typer.echo(result.data_json())
    else:
        print_todos(result.todos, raw=raw, show_done=True)


@app.command()
def up(
    ref: str = typer.Argument(..., help="Todo id, position or id prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Move a todo one place up.

    Example:
        mynd up 3
    """
    _show(run("move_up", {"id": resolve_ref(ref)}), json_output, raw)


@app.command()
def down(
    ref: str = typer.Argument(..., help="Todo id, position or id prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Move a todo one place down.

    Example:
        mynd down 1
    """
    _show(run("move_down", {"id": resolve_ref(ref)}), json_output, raw)


@app.command()
def below(
    ref: str = typer.Argument(..., help="Todo to move"),
    target: str = typer.Argument(..., help="Todo it should end up directly below"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Move a todo so it sits directly below another one.

    Both references are resolved against the list before the move.

    Example:
        mynd below 1 3     # first todo now follows the third
    """
    todo_id = resolve_ref(ref)
    target_id = resolve_ref(target)
    _show(run("move_below", {"id": todo_id, "targetId": target_id}), json_output, raw)
