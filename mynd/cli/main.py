"""
FILE: mynd/cli/main.py
PURPOSE: Typer-based CLI for one-shot todo commands
EXPORTS:
  - app (Typer application, re-exported from mynd.cli.app)
  - main() (entry point)
  - add() - Add todo
  - ls() - List todos
  - done() - Toggle done
  - rm() - Delete todo
  - clean() - Delete done todos
  - up() / down() / below() - Reorder
  - dump() - Print list as JSON
  - import_() - Append todos from a file
  - config_get() / config_set() / config_ls() - Settings
  - repl() - Launch interactive session
  - version() - Show version
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - mynd.commands (command surface, through mynd.cli.app)
  - mynd.logging (configure_logging)
  - mynd.repl (interactive mode)
NOTES:
  - List commands support --json and --raw flags
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - Every command goes through the command surface, never the store directly
"""

import sys

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer

from ..config import load_config
from ..core.exceptions import MyndError
from ..logging import configure_logging
from .app import app, error_console


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs on stderr"),
):
    """
    Default callback - sets up logging, launches REPL when no command is given.

    If a subcommand is invoked, it runs after this returns.
    If no subcommand is invoked (just 'mynd'), launch the REPL.
    """
    try:
        level = load_config().log_level
    except MyndError:
        # The command itself reports a broken config file
        level = None
    configure_logging(level=level, verbose=verbose)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {e}")
            raise typer.Exit(1)


# Import command modules to register commands with app
from .commands import (
    add,
    ls,
    done,
    rm,
    clean,
    up,
    down,
    below,
    dump,
    import_,
    config_get,
    config_set,
    config_ls,
    version,
    repl,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
