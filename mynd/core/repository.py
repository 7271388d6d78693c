"""
FILE: mynd/core/repository.py
PURPOSE: File persistence for the ordered todo list
EXPORTS:
  - JsonFileRepository (read/write the whole list as a JSON array)
  - GzipJsonFileRepository (same document, gzip-compressed)
  - repository_for(config) -> JsonFileRepository
  - decode_todos(records, source) -> List[Todo]
DEPENDENCIES:
  - gzip, zlib, json, os, tempfile, pathlib (stdlib)
  - mynd.core.models (Todo)
  - mynd.core.exceptions (StorageError, FormatError)
  - mynd.config (MyndConfig, get_data_path) for repository_for()
NOTES:
  - The whole list is written on every save, never patched in place
  - Writes go to a temp file in the same directory, are fsynced, then
    os.replace()d over the target so readers never see a partial file
  - A missing file reads as an empty list
  - Returns domain objects (Todo), never raw dicts
"""

import gzip
import json
import logging
import os
import tempfile
import zlib
from pathlib import Path
from typing import Any, List

from ..config import get_data_path
from .constants import SAVE_FORMAT_BINARY
from .exceptions import StorageError, FormatError
from .models import Todo

logger = logging.getLogger(__name__)


def decode_todos(records: Any, source: str) -> List[Todo]:
    """
    Turn a decoded JSON document into an ordered list of todos.

    Args:
        records: Decoded JSON (must be a list of todo objects)
        source: Name of the file the records came from, for error messages

    Returns:
        List of Todo objects in file order

    Raises:
        FormatError: If the document is not a list, an item is invalid,
            or two items share an id
    """
    if not isinstance(records, list):
        raise FormatError(f"{source}: expected a list of todos")

    todos = []
    seen = set()
    for index, record in enumerate(records):
        try:
            todo = Todo.from_dict(record)
        except FormatError as e:
            raise FormatError(f"{source}: item {index}: {e}") from None
        if todo.id in seen:
            raise FormatError(f"{source}: duplicate todo id {todo.id}")
        seen.add(todo.id)
        todos.append(todo)

    return todos


class JsonFileRepository:
    """
    Persistence adapter storing the ordered todo list in one JSON file.

    Attributes:
        path: Location of the data file
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> List[Todo]:
        """
        Read the persisted list.

        Returns:
            Todos in saved order, or [] if the file doesn't exist

        Raises:
            StorageError: If the file can't be read or its content is corrupt
        """
        if not self.path.exists():
            logger.debug("No data file at %s, starting empty", self.path)
            return []

        try:
            raw = self._read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read {self.path}: {e}", self.path) from e

        try:
            records = json.loads(raw.decode("utf-8"))
            return decode_todos(records, str(self.path))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"{self.path} is corrupt: {e}", self.path) from e
        except FormatError as e:
            raise StorageError(f"Saved list is corrupt: {e}", self.path) from e

    def write(self, todos: List[Todo]) -> None:
        """
        Replace the persisted list atomically.

        Args:
            todos: Full ordered list to save

        Raises:
            StorageError: If the file can't be written (nothing is replaced)
        """
        payload = json.dumps([t.to_dict() for t in todos], indent=2) + "\n"
        try:
            self._write_atomic(self._encode(payload.encode("utf-8")))
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}", self.path) from e

        logger.debug("Saved %d todo(s) to %s", len(todos), self.path)

    def _read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def _encode(self, data: bytes) -> bytes:
        return data

    def _write_atomic(self, data: bytes) -> None:
        """Write bytes via tempfile + fsync + os.replace()."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise


class GzipJsonFileRepository(JsonFileRepository):
    """Same JSON document as JsonFileRepository, stored gzip-compressed."""

    def _read_bytes(self) -> bytes:
        try:
            return gzip.decompress(self.path.read_bytes())
        except (gzip.BadGzipFile, EOFError, zlib.error) as e:
            raise StorageError(f"{self.path} is corrupt: {e}", self.path) from e

    def _encode(self, data: bytes) -> bytes:
        # mtime=0 keeps the output identical for identical lists
        return gzip.compress(data, mtime=0)


def repository_for(config) -> JsonFileRepository:
    """
    Build the persistence adapter described by a config.

    Args:
        config: MyndConfig (save_file_format and data_file are used)

    Returns:
        GzipJsonFileRepository for the binary format, JsonFileRepository otherwise
    """
    path = get_data_path(config)
    if config.save_file_format == SAVE_FORMAT_BINARY:
        return GzipJsonFileRepository(path)
    return JsonFileRepository(path)
