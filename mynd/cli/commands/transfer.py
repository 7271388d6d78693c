"""
FILE: mynd/cli/commands/transfer.py
PURPOSE: Bulk data commands (dump, import)
"""

import typer

from ..app import app, console, run


@app.command()
def dump():
    """
    Print the whole list, done todos included, as JSON.

    The output can be fed back in with `mynd import`.

    Example:
        mynd dump > backup.json
    """
    typer.echo(run("dump").data_json())


@app.command(name="import")
def import_(
    path: str = typer.Argument(..., help="File to import (.json, .gz or plain text lines)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Append todos from a file.

    Accepts a JSON list of todos (as written by `dump`), gzip-compressed
    JSON, or a text file with one todo per line. Nothing is imported if
    any entry is invalid.

    Example:
        mynd import backup.json
        mynd import notes.txt
    """
    before = len(run("dump").todos)
    result = run("import", {"path": path})
    added = len(result.todos) - before

    if json_output:
        typer.echo(result.data_json())
    elif raw:
        typer.echo(str(added))
    else:
        console.print(f"[green]✓ Imported {added} todo{'s' if added != 1 else ''}[/green]")
