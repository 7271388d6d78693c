"""
FILE: mynd/core/service.py
PURPOSE: The ordered todo store and its operations
EXPORTS:
  - TodoStore (class)
    - load() -> List[Todo]
    - add(message) -> List[Todo]
    - remove(todo_id) -> List[Todo]        (toggle done, the soft delete)
    - delete(todo_id) -> List[Todo]        (permanent)
    - remove_done() -> List[Todo]
    - move_up(todo_id) / move_down(todo_id) -> List[Todo]
    - move_below(todo_id, target_id) -> List[Todo]
    - dump() -> List[Todo]
    - import_from(path) -> List[Todo]
    - list_pending() -> List[Todo]
    - relocate(repository) -> List[Todo]
DEPENDENCIES:
  - mynd.core.models (Todo)
  - a repository adapter passed in (JsonFileRepository or compatible)
  - mynd.core.importer (load_import_records)
  - mynd.core.exceptions (TodoNotFoundError, FormatError)
NOTES:
  - List order is the ranking; there is no position field
  - Every mutation builds a new list, saves it, then swaps it in. If the
    save fails the in-memory list is untouched and StorageError propagates
  - No-op operations don't write
  - Every operation returns a copy of the complete list, except
    list_pending() which is the not-done view
  - "remove" toggles done; it never deletes (see delete)
"""

import logging
from typing import List, Optional

from .importer import load_import_records
from .models import Todo, new_todo_id, utc_now_iso
from .exceptions import TodoNotFoundError, FormatError

logger = logging.getLogger(__name__)


class TodoStore:
    """
    In-memory ordered todo list backed by a persistence adapter.

    Attributes:
        repository: Adapter with read()/write() for the whole list
        loaded: Whether load() has run in this process
    """

    def __init__(self, repository, todos: Optional[List[Todo]] = None):
        self.repository = repository
        self._todos: List[Todo] = list(todos) if todos else []
        self.loaded = todos is not None

    @property
    def todos(self) -> List[Todo]:
        return list(self._todos)

    def __len__(self) -> int:
        return len(self._todos)

    # --- Internal helpers ---

    def _find_index(self, todo_id: str) -> int:
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise TodoNotFoundError(todo_id)

    def _commit(self, todos: List[Todo], action: str) -> List[Todo]:
        """
        Persist a new list and make it current.

        The repository write happens first; the in-memory list only changes
        once the file has been replaced.
        """
        self.repository.write(todos)
        self._todos = todos
        logger.info("%s (%d todo(s))", action, len(todos))
        return self.todos

    # --- Loading and views ---

    def load(self) -> List[Todo]:
        """
        Read the persisted list into memory, replacing the current one.

        Returns:
            Full list (empty if nothing has been saved yet)

        Raises:
            StorageError: If the data file can't be read or is corrupt
        """
        self._todos = self.repository.read()
        self.loaded = True
        logger.debug("Loaded %d todo(s) from %r", len(self._todos), self.repository)
        return self.todos

    def dump(self) -> List[Todo]:
        """Return the full list, done items included."""
        return self.todos

    def list_pending(self) -> List[Todo]:
        """Return only not-done todos, in list order."""
        return [t for t in self._todos if not t.done]

    # --- Create / complete / delete ---

    def add(self, message: str) -> List[Todo]:
        """
        Append a new todo.

        Args:
            message: Todo text (trimmed, must not be blank)

        Returns:
            Full list with the new todo last

        Raises:
            ValidationError: If message is blank (nothing is changed)
        """
        todo = Todo.new(message)
        return self._commit(self._todos + [todo], f"Added todo {todo.id}")

    def remove(self, todo_id: str) -> List[Todo]:
        """
        Toggle the done flag of a todo (mark done, or undo mark done).

        Raises:
            TodoNotFoundError: If todo_id isn't in the list
        """
        index = self._find_index(todo_id)
        todos = list(self._todos)
        todos[index] = todos[index].with_done(not todos[index].done)
        state = "done" if todos[index].done else "not done"
        return self._commit(todos, f"Marked todo {todo_id} {state}")

    def delete(self, todo_id: str) -> List[Todo]:
        """
        Permanently delete a todo, whether or not it is done.

        Raises:
            TodoNotFoundError: If todo_id isn't in the list
        """
        index = self._find_index(todo_id)
        todos = self._todos[:index] + self._todos[index + 1:]
        return self._commit(todos, f"Deleted todo {todo_id}")

    def remove_done(self) -> List[Todo]:
        """
        Permanently delete every done todo.

        Survivors keep their relative order. Does nothing if no todo is done.
        """
        survivors = [t for t in self._todos if not t.done]
        removed = len(self._todos) - len(survivors)
        if not removed:
            logger.debug("remove_done: nothing to remove")
            return self.todos

        return self._commit(survivors, f"Removed {removed} done todo(s)")

    # --- Ordering ---

    def move_up(self, todo_id: str) -> List[Todo]:
        """
        Swap a todo with the one above it. No-op if it is already first.

        Raises:
            TodoNotFoundError: If todo_id isn't in the list
        """
        index = self._find_index(todo_id)
        if index == 0:
            logger.debug("move_up: %s is already first", todo_id)
            return self.todos

        todos = list(self._todos)
        todos[index - 1], todos[index] = todos[index], todos[index - 1]
        return self._commit(todos, f"Moved todo {todo_id} up")

    def move_down(self, todo_id: str) -> List[Todo]:
        """
        Swap a todo with the one below it. No-op if it is already last.

        Raises:
            TodoNotFoundError: If todo_id isn't in the list
        """
        index = self._find_index(todo_id)
        if index == len(self._todos) - 1:
            logger.debug("move_down: %s is already last", todo_id)
            return self.todos

        todos = list(self._todos)
        todos[index], todos[index + 1] = todos[index + 1], todos[index]
        return self._commit(todos, f"Moved todo {todo_id} down")

    def move_below(self, todo_id: str, target_id: str) -> List[Todo]:
        """
        Move a todo so it sits directly below another.

        Args:
            todo_id: Todo to move
            target_id: Todo it should end up directly after

        Returns:
            Full list in the new order

        Raises:
            TodoNotFoundError: If either id isn't in the list

        Notes:
            - The source is taken out first; if it was above the target,
              the target's index drops by one before reinserting
            - Items between the two shift by one, all others keep their order
            - Moving a todo below itself, or below the todo it already
              follows, changes nothing, so repeating a move is a no-op
        """
        source_index = self._find_index(todo_id)
        target_index = self._find_index(target_id)

        if source_index == target_index or source_index == target_index + 1:
            logger.debug("move_below: %s already below %s", todo_id, target_id)
            return self.todos

        todos = list(self._todos)
        source = todos.pop(source_index)
        if source_index < target_index:
            target_index -= 1
        todos.insert(target_index + 1, source)

        return self._commit(todos, f"Moved todo {todo_id} below {target_id}")

    # --- Import and relocation ---

    def import_from(self, path) -> List[Todo]:
        """
        Append the todos from an external file.

        Args:
            path: .json dump, .gz binary save file, or plain text list

        Returns:
            Full list with the imported todos appended in file order

        Raises:
            StorageError: If the file can't be read
            FormatError: If any record is invalid or an id is already taken
                (nothing is imported)

        Notes:
            - Records keep their own id, created_at and done when present
            - Missing ids get fresh ones, missing created_at gets now
        """
        records = load_import_records(path)

        taken = {t.id for t in self._todos}
        imported = []
        for index, record in enumerate(records):
            try:
                todo = Todo.from_dict(
                    record,
                    default_id=new_todo_id(),
                    default_created_at=utc_now_iso(),
                )
            except FormatError as e:
                raise FormatError(f"{path}: item {index}: {e}") from None

            if todo.id in taken:
                raise FormatError(f"{path}: todo id {todo.id} already exists")
            taken.add(todo.id)
            imported.append(todo)

        if not imported:
            logger.debug("import: %s contained no todos", path)
            return self.todos

        return self._commit(
            self._todos + imported, f"Imported {len(imported)} todo(s) from {path}"
        )

    def relocate(self, repository) -> List[Todo]:
        """
        Save the current list through another adapter and switch to it.

        Used when the data file or save format changes. If the write fails
        the store keeps its old adapter.
        """
        repository.write(self._todos)
        previous, self.repository = self.repository, repository
        logger.info("Moved todo data from %r to %r", previous, repository)
        return self.todos
