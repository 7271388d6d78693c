"""
FILE: mynd/cli/commands/todos.py
PURPOSE: Todo commands (add, ls, done, rm, clean)
"""

from typing import List

import typer
from rich.markup import escape

from ..app import app, console, find_todo, print_todos, resolve_ref, run
from ...utils import join_message


@app.command()
def add(
    words: List[str] = typer.Argument(..., help="Todo text (words are joined with spaces)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Add a todo to the end of the list.

    Example:
        mynd add Buy milk
        mynd add "Call the dentist"
    """
    result = run("add", {"message": join_message(words)})
    todo = result.todos[-1]

    if json_output:
        typer.echo(todo.to_json())
    elif raw:
        typer.echo(f"{len(result.todos)}: {todo.message} ({todo.id})")
    else:
        console.print(
            f"[green]✓ Added [bold]#{len(result.todos)}[/bold]:[/green] {escape(todo.message)}"
        )


@app.command()
def ls(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include done todos"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    List pending todos (add --all to include done ones).

    Example:
        mynd ls
        mynd ls --all
        mynd ls --json
    """
    if json_output and not show_all:
        typer.echo(run("list_pending").data_json())
        return

    # Positions are always counted over the full list
    todos = run("load").todos
    print_todos(todos, json_output=json_output, raw=raw, show_done=show_all)


@app.command()
def done(
    ref: str = typer.Argument(..., help="Todo id, position or id prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Toggle a todo between pending and done.

    Example:
        mynd done 2
        mynd done 9f3a
    """
    todo_id = resolve_ref(ref)
    result = run("remove", {"id": todo_id})
    todo = find_todo(result.todos, todo_id)

    if json_output:
        typer.echo(result.data_json())
    elif raw:
        typer.echo(f"{todo.id}: {'done' if todo.done else 'pending'}")
    elif todo.done:
        console.print(f"[green]✓ Done:[/green] {escape(todo.message)}")
    else:
        console.print(f"[yellow]○ Pending again:[/yellow] {escape(todo.message)}")


@app.command()
def rm(
    ref: str = typer.Argument(..., help="Todo id, position or id prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Permanently delete a todo.

    Example:
        mynd rm 3
    """
    todo_id = resolve_ref(ref)
    before = find_todo(run("dump").todos, todo_id)
    result = run("delete", {"id": todo_id})

    if json_output:
        typer.echo(result.data_json())
    elif raw:
        typer.echo(todo_id)
    else:
        console.print(f"[green]✓ Deleted:[/green] {escape(before.message)}")


@app.command()
def clean(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Delete every done todo.

    Example:
        mynd clean
    """
    before = len(run("dump").todos)
    result = run("remove_done")
    removed = before - len(result.todos)

    if json_output:
        typer.echo(result.data_json())
    elif raw:
        typer.echo(str(removed))
    elif removed:
        console.print(f"[green]✓ Removed {removed} done todo{'s' if removed != 1 else ''}[/green]")
    else:
        console.print("[dim]Nothing to clean[/dim]")
