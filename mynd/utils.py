"""
FILE: mynd/utils.py
PURPOSE: Shared helpers for CLI and REPL
EXPORTS:
  - resolve_todo_ref(todos, ref) -> str
  - join_message(words) -> str
DEPENDENCIES:
  - mynd.core.models (Todo)
  - mynd.core.constants (MIN_ID_PREFIX)
NOTES:
  - Front ends let users name a todo by exact id, 1-based position in the
    full list, or a unique id prefix
  - Resolution only rewrites the reference; unknown references are passed
    through unchanged so the store reports them as not found
"""

from typing import List, Sequence

from .core.constants import MIN_ID_PREFIX
from .core.models import Todo


def resolve_todo_ref(todos: Sequence[Todo], ref: str) -> str:
    """
    Turn a user-typed todo reference into a todo id.

    Args:
        todos: Full ordered list the reference is relative to
        ref: Exact id, 1-based position (e.g. "3"), or id prefix (>= 4 chars)

    Returns:
        Matching todo id, or ref unchanged if nothing matches uniquely

    Examples:
        >>> resolve_todo_ref(todos, "2")        # second todo in the list
        >>> resolve_todo_ref(todos, "9f3a")     # todo whose id starts with 9f3a
    """
    ref = ref.strip()

    # Exact id always wins
    if any(t.id == ref for t in todos):
        return ref

    # Position in the list (1-based)
    if ref.isdigit():
        position = int(ref)
        if 1 <= position <= len(todos):
            return todos[position - 1].id

    # Unique id prefix
    if len(ref) >= MIN_ID_PREFIX:
        matches = [t.id for t in todos if t.id.lower().startswith(ref.lower())]
        if len(matches) == 1:
            return matches[0]

    return ref


def join_message(words: List[str]) -> str:
    """Join unquoted words back into one message ("add buy milk")."""
    return " ".join(words).strip()
