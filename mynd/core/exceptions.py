"""
FILE: mynd/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - MyndError (base exception)
  - ValidationError
  - TodoNotFoundError
  - StorageError
  - FormatError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from MyndError for easy catching
  - Each class carries a short `kind` tag used by the command surface
  - Store raises these, the command surface turns them into results
"""

from typing import Optional


class MyndError(Exception):
    """Base exception for all mynd errors."""

    kind = "error"


class ValidationError(MyndError):
    """Input validation failed (blank message, bad parameter, bad config)."""

    kind = "validation"

    def __init__(self, message: str):
        super().__init__(message)


class TodoNotFoundError(MyndError):
    """Todo with given ID doesn't exist in the current list."""

    kind = "not_found"

    def __init__(self, todo_id: str):
        self.todo_id = todo_id
        super().__init__(f"Todo {todo_id} not found")


class StorageError(MyndError):
    """Reading or writing a file failed, or the saved list is corrupt."""

    kind = "io"

    def __init__(self, message: str, path: Optional[object] = None):
        self.path = path
        super().__init__(message)


class FormatError(MyndError):
    """An import payload or todo record is malformed."""

    kind = "format"

    def __init__(self, message: str):
        super().__init__(message)
