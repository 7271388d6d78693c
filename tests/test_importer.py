"""
Tests for reading import files (.json, .gz, plain text).
"""

import gzip
import json

import pytest

from mynd.core.exceptions import FormatError, StorageError
from mynd.core.importer import load_import_records, parse_text_lines


def test_parse_text_lines_plain():
    assert parse_text_lines("Buy milk\nCall mum\n") == [
        {"message": "Buy milk"},
        {"message": "Call mum"},
    ]


def test_parse_text_lines_markdown_checkboxes():
    text = "- [ ] open item\n- [x] closed item\n* [X] shouted\n-   bullet only\n"
    assert parse_text_lines(text) == [
        {"message": "open item"},
        {"message": "closed item", "done": True},
        {"message": "shouted", "done": True},
        {"message": "bullet only"},
    ]


def test_parse_text_lines_skips_blank_and_empty_items():
    assert parse_text_lines("\n   \n- [ ]\n-\nreal\n") == [{"message": "real"}]
    assert parse_text_lines("* [x]\n  -  \n[ ]\n") == []


def test_load_json_list(tmp_path):
    path = tmp_path / "dump.json"
    path.write_text(json.dumps([{"message": "a"}, {"message": "b"}]), encoding="utf-8")

    assert load_import_records(path) == [{"message": "a"}, {"message": "b"}]


def test_load_json_wrapped_in_todos_key(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"todos": [{"message": "a"}]}), encoding="utf-8")

    assert load_import_records(path) == [{"message": "a"}]


def test_load_gzip_json(tmp_path):
    path = tmp_path / "todos.json.gz"
    path.write_bytes(gzip.compress(json.dumps([{"message": "zipped"}]).encode("utf-8")))

    assert load_import_records(path) == [{"message": "zipped"}]


def test_load_text_file(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("- [x] done thing\nother thing\n", encoding="utf-8")

    assert load_import_records(path) == [
        {"message": "done thing", "done": True},
        {"message": "other thing"},
    ]


def test_load_missing_file(tmp_path):
    with pytest.raises(StorageError):
        load_import_records(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "name,content",
    [
        ("bad.json", b"{not json"),
        ("object.json", b'{"message": "not a list"}'),
        ("bad.gz", b"not gzip at all"),
        ("latin.txt", "caf\xe9".encode("latin-1")),
    ],
)
def test_load_malformed(tmp_path, name, content):
    path = tmp_path / name
    path.write_bytes(content)

    with pytest.raises(FormatError):
        load_import_records(path)
