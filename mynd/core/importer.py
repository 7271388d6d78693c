"""
FILE: mynd/core/importer.py
PURPOSE: Read external todo files for the import operation
EXPORTS:
  - load_import_records(path) -> List[dict]
  - parse_text_lines(text) -> List[dict]
DEPENDENCIES:
  - gzip, json, re, zlib, pathlib (stdlib)
  - mynd.core.exceptions (StorageError, FormatError)
NOTES:
  - .json: a dump (list of todo objects) or {"todos": [...]}
  - .gz: gzip-compressed JSON, i.e. a binary save file
  - anything else: plain text, one todo per non-blank line
  - Returns raw records; TodoStore.import_from() validates them into Todos
"""

import gzip
import json
import re
import zlib
from pathlib import Path
from typing import Any, Dict, List

from .exceptions import StorageError, FormatError

# Optional markdown list marker and checkbox: "- ", "* ", "- [ ] ", "- [x] "
_LINE_PREFIX = re.compile(r"^\s*(?:[-*](?:\s+|$))?(?:\[(?P<mark>[ xX])\](?:\s+|$))?")


def parse_text_lines(text: str) -> List[Dict[str, Any]]:
    """
    Parse plain text into todo records, one per non-blank line.

    Examples:
        >>> parse_text_lines("buy milk\\n- [x] write report\\n")
        [{"message": "buy milk"}, {"message": "write report", "done": True}]
    """
    records = []
    for line in text.splitlines():
        if not line.strip():
            continue

        match = _LINE_PREFIX.match(line)
        message = line[match.end():].strip()
        if not message:
            # Bare checkbox or bullet with no text
            continue

        record: Dict[str, Any] = {"message": message}
        if match.group("mark") in ("x", "X"):
            record["done"] = True
        records.append(record)

    return records


def _unwrap(document: Any, path: Path) -> List[Dict[str, Any]]:
    # Accept either a bare dump or {"todos": [...]}
    if isinstance(document, dict) and "todos" in document:
        document = document["todos"]

    if not isinstance(document, list):
        raise FormatError(f"{path}: expected a list of todos")

    return document


def load_import_records(path) -> List[Dict[str, Any]]:
    """
    Load raw todo records from an external file.

    Args:
        path: File to import (.json, .gz, or plain text)

    Returns:
        List of record dicts in file order (not yet validated)

    Raises:
        StorageError: If the file doesn't exist or can't be read
        FormatError: If the content can't be decoded or has the wrong shape
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise StorageError(f"Import file not found: {path}", path)

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise StorageError(f"Could not read {path}: {e}", path) from e

    suffix = path.suffix.lower()

    if suffix == ".gz":
        try:
            raw = gzip.decompress(raw)
        except (gzip.BadGzipFile, EOFError, zlib.error) as e:
            raise FormatError(f"{path} is not a valid gzip file: {e}") from e
        suffix = ".json"

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"{path} is not UTF-8 text: {e}") from e

    if suffix == ".json":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise FormatError(f"{path} is not valid JSON: {e}") from e
        return _unwrap(document, path)

    return parse_text_lines(text)
