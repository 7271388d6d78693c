"""
FILE: mynd/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - TodoFormatter: Class for formatting todo lists
  - format_relative_date(iso_string) -> str
DEPENDENCIES:
  - rich (for table formatting)
  - datetime (stdlib)
  - mynd.core.models (Todo)
NOTES:
  - Used by both CLI and REPL so both show the same thing
  - Row numbers are positions in the FULL list, even when done todos are
    hidden, so "done 3" means the same todo in every view
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from .core.models import Todo


def format_relative_date(iso_string: Optional[str]) -> str:
    """
    Convert an ISO timestamp string to human-readable relative time.

    Returns:
        "just now", "5 minutes ago", "3 hours ago", "yesterday",
        "4 days ago", "Jan 15" (same year) or "Jan 15, 2024".
        "-" for empty input; the original string if it can't be parsed.
    """
    if not iso_string:
        return "-"

    try:
        dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return iso_string

    # Compare in local time; naive timestamps are treated as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone()
    now = datetime.now().astimezone()

    seconds = (now - dt).total_seconds()

    # Clock skew between machines can put created_at slightly ahead
    if seconds < 60:
        return "just now"

    if seconds < 3600:
        minutes = int(seconds / 60)
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"

    if seconds < 86400:
        hours = int(seconds / 3600)
        return f"{hours} hour{'s' if hours != 1 else ''} ago"

    if dt.date() == now.date() - timedelta(days=1):
        return "yesterday"

    days = int(seconds / 86400)
    if days < 7:
        return f"{days} day{'s' if days != 1 else ''} ago"

    if dt.year == now.year:
        return dt.strftime("%b %d")

    return dt.strftime("%b %d, %Y")


class TodoFormatter:
    """Centralized todo display formatting."""

    @staticmethod
    def visible(todos: List[Todo], show_done: bool = True) -> List[tuple]:
        """(position, todo) pairs to display; positions are 1-based, full list."""
        return [
            (position, todo)
            for position, todo in enumerate(todos, start=1)
            if show_done or not todo.done
        ]

    @staticmethod
    def create_table(
        todos: List[Todo],
        title: str = "Todos",
        show_done: bool = True,
        show_ids: bool = True,
    ) -> Table:
        """
        Create Rich table for todos.

        Args:
            todos: Full ordered list
            title: Table title
            show_done: Include done todos (struck through)
            show_ids: Show the short id column

        Returns:
            Rich Table object ready for display
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("#", style="cyan", width=4, no_wrap=True, justify="right")
        table.add_column("", width=1, no_wrap=True)
        table.add_column("Todo", style="white")
        table.add_column("Created", style="dim", no_wrap=True)
        if show_ids:
            table.add_column("ID", style="dim", no_wrap=True)

        for position, todo in TodoFormatter.visible(todos, show_done):
            if todo.done:
                marker = "[green]✓[/green]"
                message = f"[strike dim]{escape(todo.message)}[/strike dim]"
            else:
                marker = "[yellow]○[/yellow]"
                message = escape(todo.message)

            row = [str(position), marker, message, format_relative_date(todo.created_at)]
            if show_ids:
                row.append(todo.id[:8])
            table.add_row(*row)

        return table

    @staticmethod
    def format_raw(todos: List[Todo], show_done: bool = True) -> List[str]:
        """
        Plain text lines, one per todo: "<position>: [x] <message> (<id>)".
        """
        lines = []
        for position, todo in TodoFormatter.visible(todos, show_done):
            mark = "x" if todo.done else " "
            lines.append(f"{position}: [{mark}] {todo.message} ({todo.id})")
        return lines

    @staticmethod
    def summary(todos: List[Todo]) -> str:
        """Short count line, e.g. "3 pending, 1 done"."""
        done = sum(1 for t in todos if t.done)
        return f"{len(todos) - done} pending, {done} done"
