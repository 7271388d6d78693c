"""
FILE: mynd/cli/commands/system.py
PURPOSE: System commands (version, repl)
"""

import typer

from ..app import app, console, error_console
from ... import __version__


@app.command()
def version():
    """Show mynd version."""
    console.print(f"mynd v{__version__}")


@app.command()
def repl():
    """
    Launch the interactive session.

    Example:
        mynd repl
    """
    from ...repl import main as repl_main

    try:
        repl_main()
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {e}")
        raise typer.Exit(1)
