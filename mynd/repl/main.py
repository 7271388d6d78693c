"""
FILE: mynd/repl/main.py
PURPOSE: Interactive REPL for the todo list with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl() - Main REPL loop
  - execute_command(result) -> bool
  - REPLContext, repl_context (session state)
  - run_surface(name, params) -> Optional[CommandResult]
  - resolve(ref) -> Optional[str]
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - mynd.commands (CommandSurface)
  - mynd.repl.parser (command parsing)
  - mynd.repl.completer (autocomplete)
NOTES:
  - The session keeps one CommandSurface, and so one in-memory list, for
    its whole lifetime; the file is only re-read on "load"
  - Changes made by other processes in the meantime are overwritten by
    the session's next save
  - Bottom toolbar shows pending/done counts
  - Ctrl+D or "exit"/"quit" to exit
  - Errors are printed and the loop continues
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Fix Windows console encoding for Unicode characters
# Only wrap if not already wrapped to prevent issues
if sys.platform == "win32":
    import io
    if not isinstance(sys.stdout, io.TextIOWrapper) or sys.stdout.encoding != 'utf-8':
        try:
            sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable
    if not isinstance(sys.stderr, io.TextIOWrapper) or sys.stderr.encoding != 'utf-8':
        try:
            sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.formatted_text import HTML
from rich.console import Console

from ..commands import CommandResult, CommandSurface, open_surface
from ..core.exceptions import MyndError
from ..core.models import Todo
from ..formatting import TodoFormatter
from ..utils import resolve_todo_ref
from .parser import parse_command, ParseResult
from .completer import create_completer
from .display import display_error

logger = logging.getLogger(__name__)

# Rich console for formatted output
console = Console()


# --- REPL Context (Persistent State) ---


@dataclass
class REPLContext:
    """
    Persistent state for the REPL session.

    Attributes:
        surface: Command surface holding the session's in-memory list
            (opened on first use)
    """
    surface: Optional[CommandSurface] = None

    def get_surface(self) -> CommandSurface:
        if self.surface is None:
            self.surface = open_surface()
        return self.surface

    def todos(self) -> List[Todo]:
        """Current in-memory list (empty until something loads it)."""
        if self.surface is None or not self.surface.store.loaded:
            return []
        return self.surface.store.todos


# Global REPL context (persists during session, resets on restart)
repl_context = REPLContext()


def run_surface(name: str, params: Optional[Dict[str, Any]] = None) -> Optional[CommandResult]:
    """
    Invoke a surface command, printing any error.

    Returns:
        The CommandResult on success, None if the command failed
    """
    try:
        surface = repl_context.get_surface()
    except MyndError as e:
        # Broken config file; retried on the next command
        display_error(str(e), console)
        return None

    result = surface.invoke(name, params)
    if not result.ok:
        display_error(result.error.message, console)
        return None
    return result


def resolve(ref: str) -> Optional[str]:
    """Resolve a todo reference against the session's list (None on error)."""
    result = run_surface("dump")
    if result is None:
        return None
    return resolve_todo_ref(result.todos, ref)


def format_prompt() -> HTML:
    """Prompt text: "mynd> " in bold."""
    return HTML("<b>mynd&gt; </b>")


def get_bottom_toolbar() -> HTML:
    """
    Create bottom toolbar showing pending/done counts.

    Returns:
        HTML formatted toolbar
    """
    summary = TodoFormatter.summary(repl_context.todos())
    return HTML(f"<style bg='#444444' fg='#ffffff'> {summary} | Type 'help' for commands </style>")


# Import command handlers from command modules
from .commands import (
    # Todo handlers
    handle_add_command,
    handle_ls_command,
    handle_done_command,
    handle_rm_command,
    handle_clean_command,
    handle_up_command,
    handle_down_command,
    handle_below_command,
    # Data handlers
    handle_dump_command,
    handle_import_command,
    handle_load_command,
    # System handlers
    handle_config_command,
    handle_help_command,
    handle_clear_command,
)


def execute_command(result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Args:
        result: Parsed command from parser

    Returns:
        True to continue REPL loop, False to exit

    Dispatches to appropriate handler based on command name.
    """
    command = result.command.lower()

    # Exit commands
    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    # Empty command (just Enter pressed)
    if not command:
        return True

    handlers = {
        "add": handle_add_command,
        "ls": handle_ls_command,
        "done": handle_done_command,
        "rm": handle_rm_command,
        "clean": handle_clean_command,
        "up": handle_up_command,
        "down": handle_down_command,
        "below": handle_below_command,
        "dump": handle_dump_command,
        "import": handle_import_command,
        "load": handle_load_command,
        "config": handle_config_command,
        "help": handle_help_command,
        "clear": handle_clear_command,
    }

    handler = handlers.get(command)
    if handler:
        handler(result)
        # Add whitespace after command output for readability
        console.print()
    else:
        console.print(f"[red]Unknown command:[/red] {command}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()

    return True


def run_repl() -> None:
    """
    Main REPL loop.

    Sets up prompt_toolkit session with:
    - Command history (in-memory, not persisted)
    - Autocomplete (commands, positions, flags)
    - Bottom toolbar with counts

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    """
    # In piped/test environments, skip prompt_toolkit entirely
    has_tty = sys.stdout.isatty() and sys.stdin.isatty()

    session = None
    use_simple_input = not has_tty

    if has_tty:
        history = InMemoryHistory()
        completer = create_completer(repl_context.todos)

        try:
            session = PromptSession(
                history=history,
                completer=completer,
                complete_while_typing=True,
                bottom_toolbar=get_bottom_toolbar,
            )
        except Exception as e:
            # Fallback to simple input if prompt_toolkit fails
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {e}")
            use_simple_input = True

    console.print("[bold cyan]mynd[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    console.print()

    # Show the list on entry, which also loads it
    handle_ls_command(parse_command("ls"))
    console.print()

    while True:
        try:
            if use_simple_input or session is None:
                user_input = input("mynd> ")
            else:
                try:
                    user_input = session.prompt(format_prompt())
                except Exception as e:
                    console.print(f"[yellow]Switching to simple input mode: {e}[/yellow]")
                    use_simple_input = True
                    user_input = input("mynd> ")

            result = parse_command(user_input)

            if not execute_command(result):
                break

        except KeyboardInterrupt:
            # Ctrl+C - show message and continue
            console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            # Ctrl+D or end of input - exit cleanly
            console.print()
            console.print("[dim]Goodbye![/dim]")
            break
        except Exception as e:
            # Unexpected error - show but don't crash
            logger.exception("Unexpected error in REPL")
            console.print(f"[red]Unexpected error:[/red] {e}")


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: mynd, or mynd repl
    """
    try:
        run_repl()
    except Exception as e:
        console.print(f"[red]Fatal error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
