"""
FILE: mynd/repl/display.py
PURPOSE: Display functions for todos and errors
EXPORTS:
  - display_todos() - Show the list as a table
  - display_error() - Show a red error notice
DEPENDENCIES:
  - rich (formatted output)
  - mynd.formatting (TodoFormatter)
NOTES:
  - Accepts the console as a parameter to avoid circular imports
"""

from typing import List

from rich.console import Console
from rich.markup import escape

from ..core.models import Todo
from ..formatting import TodoFormatter

# Create console instance here to avoid circular import
console = Console()


def display_todos(
    todos: List[Todo],
    show_done: bool = True,
    console_instance: Console = None,
) -> None:
    """
    Display todos in a formatted table.

    Args:
        todos: Full ordered list (positions are counted over all of it)
        show_done: Include done todos
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if not TodoFormatter.visible(todos, show_done):
        console_instance.print("[dim]No todos[/dim]")
        return

    console_instance.print(
        TodoFormatter.create_table(todos, title=None, show_done=show_done, show_ids=False)
    )


def display_error(message: str, console_instance: Console = None) -> None:
    """Display an error notice; the session carries on afterwards."""
    if console_instance is None:
        console_instance = console
    console_instance.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
