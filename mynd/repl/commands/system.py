"""
FILE: mynd/repl/commands/system.py
PURPOSE: System command handlers for REPL (config, help, clear)
"""

from ..main import console, run_surface
from ..parser import ParseResult
from ...config import CONFIG_KEYS


def handle_config_command(result: ParseResult) -> None:
    """
    Handle 'config' command - show or change settings.

    Usage:
        config                          # all settings
        config save_file_format         # one setting
        config save_file_format binary  # change it
    """
    if not result.args:
        for key in CONFIG_KEYS:
            outcome = run_surface("config_get", {"key": key})
            if outcome is None:
                return
            console.print(f"  [cyan]{key}[/cyan] = {outcome.data or '[dim](default)[/dim]'}")
        return

    key = result.args[0]
    if len(result.args) == 1:
        outcome = run_surface("config_get", {"key": key})
        if outcome is not None:
            console.print(f"[cyan]{key}[/cyan] = {outcome.data or '[dim](default)[/dim]'}")
        return

    outcome = run_surface("config_set", {"key": key, "value": result.args[1]})
    if outcome is not None:
        console.print(f"[green]✓ {key} = {outcome.data or '(default)'}[/green]")


def handle_help_command(result: ParseResult) -> None:
    """
    Handle 'help' command - show available commands.

    Args:
        result: Parsed command (unused)
    """
    help_text = """
[bold cyan]Available Commands:[/bold cyan]

  [cyan]add <message>[/cyan]            Add a todo to the end of the list
  [cyan]ls [--all][/cyan]               List pending todos (--all includes done)
  [cyan]done <todo>[/cyan]              Toggle a todo between pending and done
  [cyan]rm <todo>[/cyan]                Delete a todo for good
  [cyan]clean[/cyan]                    Delete every done todo
  [cyan]up <todo>[/cyan]                Move a todo one place up
  [cyan]down <todo>[/cyan]              Move a todo one place down
  [cyan]below <todo> <target>[/cyan]    Move a todo directly below another
  [cyan]dump[/cyan]                     Print the list as JSON
  [cyan]import <path>[/cyan]            Append todos from a file
  [cyan]load[/cyan]                     Re-read the list from disk
  [cyan]config [<key> [<value>]][/cyan] Show or change settings
  [cyan]help[/cyan]                     Show this help
  [cyan]clear[/cyan]                    Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]            Exit REPL

[bold cyan]Referring to todos:[/bold cyan]

  A todo is its position in the list (1, 2, ...), its id, or the
  first 4+ characters of its id.

[bold cyan]Examples:[/bold cyan]

  [dim]add Buy groceries
  add "Call the dentist"
  done 2
  below 1 3
  config save_file_format binary[/dim]
"""
    console.print(help_text)


def handle_clear_command(result: ParseResult) -> None:
    """
    Handle 'clear' command - clear the screen.

    Args:
        result: Parsed command (unused)
    """
    console.clear()
