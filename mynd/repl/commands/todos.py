"""
FILE: mynd/repl/commands/todos.py
PURPOSE: Todo command handlers for REPL (add, ls, done, rm, clean, up, down, below)
NOTES:
  - References are resolved against the session's in-memory list
  - After each change the whole list is shown, done todos included
"""

from rich.markup import escape

from ..main import console, resolve, run_surface
from ..parser import ParseResult
from ..display import display_error, display_todos
from ...core.models import todos_to_json
from ...formatting import TodoFormatter
from ...utils import join_message


def _require_args(result: ParseResult, count: int, usage: str) -> bool:
    if len(result.args) < count:
        display_error(f"Usage: {usage}", console)
        return False
    return True


def handle_add_command(result: ParseResult) -> None:
    """
    Handle 'add' command - append a todo.

    Usage:
        add Buy milk
        add "Call the dentist"
    """
    if not _require_args(result, 1, "add <message>"):
        return

    outcome = run_surface("add", {"message": join_message(result.args)})
    if outcome is None:
        return

    todo = outcome.todos[-1]
    console.print(f"[green]✓ Added #{len(outcome.todos)}:[/green] {escape(todo.message)}")


def handle_ls_command(result: ParseResult) -> None:
    """
    Handle 'ls' command - list todos.

    Usage:
        ls           # pending todos
        ls --all     # done todos too
        ls --raw
        ls --json
    """
    outcome = run_surface("dump")
    if outcome is None:
        return

    show_done = bool(result.flags.get("all"))
    if result.flags.get("json"):
        visible = [t for _, t in TodoFormatter.visible(outcome.todos, show_done)]
        console.print(todos_to_json(visible), markup=False, highlight=False, soft_wrap=True)
    elif result.flags.get("raw"):
        for line in TodoFormatter.format_raw(outcome.todos, show_done):
            console.print(line, markup=False, highlight=False, soft_wrap=True)
    else:
        display_todos(outcome.todos, show_done=show_done, console_instance=console)
        console.print(f"[dim]{TodoFormatter.summary(outcome.todos)}[/dim]")


def _apply(name: str, params: dict) -> None:
    outcome = run_surface(name, params)
    if outcome is not None:
        display_todos(outcome.todos, show_done=True, console_instance=console)


def _single_ref_command(result: ParseResult, name: str, usage: str) -> None:
    if not _require_args(result, 1, usage):
        return
    todo_id = resolve(result.args[0])
    if todo_id is not None:
        _apply(name, {"id": todo_id})


def handle_done_command(result: ParseResult) -> None:
    """
    Handle 'done' command - toggle a todo between pending and done.

    Usage:
        done 2
    """
    _single_ref_command(result, "remove", "done <todo>")


def handle_rm_command(result: ParseResult) -> None:
    """
    Handle 'rm' command - delete a todo for good.

    Usage:
        rm 2
    """
    _single_ref_command(result, "delete", "rm <todo>")


def handle_clean_command(result: ParseResult) -> None:
    """Handle 'clean' command - delete every done todo."""
    _apply("remove_done", {})


def handle_up_command(result: ParseResult) -> None:
    """Handle 'up' command - move a todo one place up."""
    _single_ref_command(result, "move_up", "up <todo>")


def handle_down_command(result: ParseResult) -> None:
    """Handle 'down' command - move a todo one place down."""
    _single_ref_command(result, "move_down", "down <todo>")


def handle_below_command(result: ParseResult) -> None:
    """
    Handle 'below' command - move a todo directly below another.

    Usage:
        below 1 3    # first todo now follows the third
    """
    if not _require_args(result, 2, "below <todo> <target>"):
        return

    todo_id = resolve(result.args[0])
    target_id = resolve(result.args[1])
    if todo_id is None or target_id is None:
        return

    _apply("move_below", {"id": todo_id, "targetId": target_id})
