"""
FILE: mynd/repl/commands/data.py
PURPOSE: Data command handlers for REPL (dump, import, load)
"""

from ..main import console, run_surface
from ..parser import ParseResult
from ..display import display_error, display_todos


def handle_dump_command(result: ParseResult) -> None:
    """
    Handle 'dump' command - print the whole list as JSON.

    Usage:
        dump
    """
    outcome = run_surface("dump")
    if outcome is not None:
        console.print(outcome.data_json(), markup=False, highlight=False, soft_wrap=True)


def handle_import_command(result: ParseResult) -> None:
    """
    Handle 'import' command - append todos from a file.

    Usage:
        import ~/backup.json
        import notes.txt
    """
    if not result.args:
        display_error("Usage: import <path>", console)
        return

    before = run_surface("dump")
    if before is None:
        return

    outcome = run_surface("import", {"path": result.args[0]})
    if outcome is None:
        return

    added = len(outcome.todos) - len(before.todos)
    console.print(f"[green]✓ Imported {added} todo{'s' if added != 1 else ''}[/green]")
    display_todos(outcome.todos, show_done=True, console_instance=console)


def handle_load_command(result: ParseResult) -> None:
    """
    Handle 'load' command - re-read the list from disk.

    Picks up changes made by other mynd processes; unsaved state does not
    exist, every change is already on disk.
    """
    outcome = run_surface("load")
    if outcome is not None:
        console.print(f"[green]✓ Loaded {len(outcome.todos)} todos[/green]")
        display_todos(outcome.todos, show_done=True, console_instance=console)
