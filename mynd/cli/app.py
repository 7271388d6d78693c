"""
FILE: mynd/cli/app.py
PURPOSE: Shared Typer app, consoles and command-surface plumbing for the CLI
EXPORTS:
  - app (Typer application), config_app (config sub-command group)
  - console, error_console (Rich consoles)
  - get_surface() -> CommandSurface
  - run(name, params) -> CommandResult
  - resolve_ref(ref) -> str
  - print_todos(todos, json_output, raw, show_done)
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - mynd.commands (CommandSurface, open_surface)
  - mynd.formatting (TodoFormatter)
NOTES:
  - One CommandSurface per process: each CLI invocation re-reads the file
  - Errors go to stderr as "Error: <message>" and exit with code 1
  - JSON and raw output use plain echo so long lines are never wrapped
"""

from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..commands import CommandResult, CommandSurface, open_surface
from ..core.exceptions import MyndError
from ..core.models import Todo, todos_to_json
from ..formatting import TodoFormatter
from ..utils import resolve_todo_ref

# Typer app setup
app = typer.Typer(
    name="mynd",
    help="Personal todo list for the terminal",
    add_completion=False,
)

# Config sub-command group
config_app = typer.Typer(
    name="config",
    help="Read and change settings",
)
app.add_typer(config_app, name="config")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

_surface: Optional[CommandSurface] = None


def fail(message: str) -> None:
    """Print an error to stderr and exit with code 1."""
    error_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    raise typer.Exit(1)


def get_surface() -> CommandSurface:
    """Command surface for this process, opened on first use."""
    global _surface
    if _surface is None:
        try:
            _surface = open_surface()
        except MyndError as e:
            fail(str(e))
    return _surface


def run(name: str, params: Optional[Dict[str, Any]] = None) -> CommandResult:
    """
    Invoke a surface command, exiting with an error message if it fails.

    Returns:
        The successful CommandResult
    """
    result = get_surface().invoke(name, params)
    if not result.ok:
        fail(result.error.message)
    return result


def resolve_ref(ref: str) -> str:
    """Resolve a todo reference (id, position, id prefix) against the full list."""
    return resolve_todo_ref(run("dump").todos, ref)


def find_todo(todos: List[Todo], todo_id: str) -> Optional[Todo]:
    return next((t for t in todos if t.id == todo_id), None)


def print_todos(
    todos: List[Todo],
    json_output: bool = False,
    raw: bool = False,
    show_done: bool = True,
    title: str = "Todos",
) -> None:
    """
    Print a todo list as JSON, plain text or a Rich table.

    Args:
        todos: Full ordered list (positions are computed from it)
        json_output: Print the JSON array (done todos filtered by show_done)
        raw: One plain line per todo
        show_done: Include done todos
        title: Table title
    """
    if json_output:
        visible = [t for _, t in TodoFormatter.visible(todos, show_done)]
        typer.echo(todos_to_json(visible))
        return

    if raw:
        for line in TodoFormatter.format_raw(todos, show_done):
            typer.echo(line)
        return

    visible = TodoFormatter.visible(todos, show_done)
    if not visible:
        console.print("[dim]No todos[/dim]")
        return

    console.print(TodoFormatter.create_table(todos, title=title, show_done=show_done))
    console.print(f"\n[dim]{TodoFormatter.summary(todos)}[/dim]")
