"""
FILE: mynd/core/models.py
PURPOSE: Domain model for a single todo item
EXPORTS:
  - Todo (frozen dataclass)
  - todos_to_json(todos) -> str
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime (stdlib)
  - json (stdlib)
  - uuid (stdlib)
  - mynd.core.exceptions (ValidationError, FormatError)
NOTES:
  - Todo is immutable; toggling done produces a new Todo via with_done()
  - Position is not stored, it is the index in the owning list
  - Timestamps stored as ISO-8601 strings (UTC, timezone-aware)
  - to_dict()/from_dict() define the JSON shape used on disk and on the wire
"""

import json
import uuid
from dataclasses import dataclass, asdict, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError, FormatError


def new_todo_id() -> str:
    """Generate a random 128-bit todo id as 32 hex characters."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    """Current time as an ISO-8601 string with UTC offset."""
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Todo:
    """A todo message with its creation time and done flag."""

    id: str
    message: str
    created_at: str
    done: bool = False

    @classmethod
    def new(cls, message: str) -> "Todo":
        """
        Create a fresh todo.

        Args:
            message: Todo text (required, must not be blank)

        Returns:
            New Todo with a random id, created_at=now and done=False

        Raises:
            ValidationError: If message is empty or whitespace-only
        """
        if not isinstance(message, str):
            raise ValidationError("Todo message must be text")

        message = message.strip()
        if not message:
            raise ValidationError("Todo message cannot be empty")

        return cls(id=new_todo_id(), message=message, created_at=utc_now_iso())

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        default_id: Optional[str] = None,
        default_created_at: Optional[str] = None,
    ) -> "Todo":
        """
        Build a Todo from its JSON shape.

        Args:
            data: Mapping with message and optionally id, created_at, done
            default_id: Used when data has no id (None means the id is required)
            default_created_at: Used when data has no created_at (None means required)

        Returns:
            Parsed Todo

        Raises:
            FormatError: If any field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise FormatError(f"Expected a todo object, got {type(data).__name__}")

        todo_id = data.get("id", default_id)
        if not isinstance(todo_id, str) or not todo_id.strip():
            raise FormatError("Todo is missing a valid 'id'")

        message = data.get("message")
        if not isinstance(message, str) or not message.strip():
            raise FormatError(f"Todo {todo_id} is missing a non-empty 'message'")

        created_at = data.get("created_at", default_created_at)
        if not isinstance(created_at, str):
            raise FormatError(f"Todo {todo_id} is missing 'created_at'")
        try:
            datetime.fromisoformat(created_at)
        except ValueError:
            raise FormatError(
                f"Todo {todo_id} has an invalid 'created_at': {created_at!r}"
            ) from None

        done = data.get("done", False)
        if not isinstance(done, bool):
            raise FormatError(f"Todo {todo_id} has a non-boolean 'done'")

        return cls(id=todo_id, message=message, created_at=created_at, done=done)

    def with_done(self, done: bool) -> "Todo":
        """Return a copy of this todo with the given done flag."""
        return replace(self, done=done)

    def to_dict(self) -> Dict[str, Any]:
        """Convert todo to its JSON-ready dict."""
        return asdict(self)

    def to_json(self) -> str:
        """Serialize todo to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def todos_to_json(todos: List[Todo], indent: Optional[int] = 2) -> str:
    """Serialize an ordered list of todos to a JSON array."""
    return json.dumps([t.to_dict() for t in todos], indent=indent)
