"""
Tests for TodoStore: every operation, ordering rules, persistence and rollback.
"""

import json

import pytest

from mynd.core.exceptions import (
    FormatError,
    StorageError,
    TodoNotFoundError,
    ValidationError,
)
from mynd.core.models import Todo
from mynd.core.repository import GzipJsonFileRepository, JsonFileRepository
from mynd.core.service import TodoStore


class CountingRepository(JsonFileRepository):
    """JSON repository that counts writes and can be told to fail."""

    def __init__(self, path):
        super().__init__(path)
        self.writes = 0
        self.fail = False

    def write(self, todos):
        if self.fail:
            raise StorageError("simulated write failure", self.path)
        self.writes += 1
        super().write(todos)


@pytest.fixture
def repo(tmp_path):
    return CountingRepository(tmp_path / "todos.json")


@pytest.fixture
def abc_store(repo):
    """Store holding A, B, C in that order."""
    todo_store = TodoStore(repo)
    todo_store.load()
    for message in ("A", "B", "C"):
        todo_store.add(message)
    repo.writes = 0
    return todo_store


def _messages(todos):
    return [t.message for t in todos]


def _id(todo_store, message):
    return next(t.id for t in todo_store.todos if t.message == message)


# --- load / dump ---


def test_load_empty_when_no_file(store):
    assert store.load() == []
    assert store.loaded is True


def test_load_reads_persisted_list(abc_store, repo):
    fresh = TodoStore(JsonFileRepository(repo.path))
    assert _messages(fresh.load()) == ["A", "B", "C"]


def test_load_corrupt_file_raises(tmp_path):
    path = tmp_path / "todos.json"
    path.write_text("[{broken", encoding="utf-8")

    with pytest.raises(StorageError):
        TodoStore(JsonFileRepository(path)).load()


def test_dump_includes_done(abc_store):
    abc_store.remove(_id(abc_store, "B"))
    assert _messages(abc_store.dump()) == ["A", "B", "C"]


def test_returned_list_is_a_copy(abc_store):
    todos = abc_store.dump()
    todos.clear()
    assert len(abc_store) == 3


# --- add ---


def test_add_appends_and_persists(store, data_path):
    store.add("first")
    result = store.add("second")

    assert _messages(result) == ["first", "second"]
    saved = json.loads(data_path.read_text(encoding="utf-8"))
    assert [d["message"] for d in saved] == ["first", "second"]
    assert saved[1]["done"] is False


def test_add_blank_message_changes_nothing(abc_store, repo):
    with pytest.raises(ValidationError):
        abc_store.add("   ")

    assert _messages(abc_store.todos) == ["A", "B", "C"]
    assert repo.writes == 0


# --- remove (toggle done) ---


def test_remove_toggles_done(abc_store):
    b = _id(abc_store, "B")

    after_first = abc_store.remove(b)
    assert [t.done for t in after_first] == [False, True, False]

    after_second = abc_store.remove(b)
    assert [t.done for t in after_second] == [False, False, False]
    assert _messages(after_second) == ["A", "B", "C"]


def test_remove_unknown_id(abc_store, repo):
    with pytest.raises(TodoNotFoundError) as exc_info:
        abc_store.remove("missing")

    assert exc_info.value.todo_id == "missing"
    assert repo.writes == 0


# --- delete / remove_done ---


def test_delete_removes_item(abc_store):
    assert _messages(abc_store.delete(_id(abc_store, "B"))) == ["A", "C"]


def test_delete_done_item(abc_store):
    b = _id(abc_store, "B")
    abc_store.remove(b)
    assert _messages(abc_store.delete(b)) == ["A", "C"]


def test_delete_unknown_id(abc_store):
    with pytest.raises(TodoNotFoundError):
        abc_store.delete("missing")
    assert len(abc_store) == 3


def test_remove_done_keeps_survivor_order(abc_store):
    abc_store.remove(_id(abc_store, "A"))
    abc_store.remove(_id(abc_store, "C"))

    result = abc_store.remove_done()

    assert _messages(result) == ["B"]
    assert all(not t.done for t in result)


def test_remove_done_without_done_items_does_not_write(abc_store, repo):
    assert _messages(abc_store.remove_done()) == ["A", "B", "C"]
    assert repo.writes == 0


# --- move_up / move_down ---


def test_move_up_swaps_with_predecessor(abc_store):
    assert _messages(abc_store.move_up(_id(abc_store, "C"))) == ["A", "C", "B"]


def test_move_up_first_is_noop(abc_store, repo):
    assert _messages(abc_store.move_up(_id(abc_store, "A"))) == ["A", "B", "C"]
    assert repo.writes == 0


def test_move_down_swaps_with_successor(abc_store):
    assert _messages(abc_store.move_down(_id(abc_store, "A"))) == ["B", "A", "C"]


def test_move_down_last_is_noop(abc_store, repo):
    assert _messages(abc_store.move_down(_id(abc_store, "C"))) == ["A", "B", "C"]
    assert repo.writes == 0


def test_move_up_then_down_restores_order(abc_store):
    b = _id(abc_store, "B")
    abc_store.move_up(b)
    assert _messages(abc_store.move_down(b)) == ["A", "B", "C"]


@pytest.mark.parametrize("method", ["move_up", "move_down"])
def test_move_unknown_id(abc_store, method):
    with pytest.raises(TodoNotFoundError):
        getattr(abc_store, method)("missing")


# --- move_below ---


def test_move_below_forward(abc_store):
    result = abc_store.move_below(_id(abc_store, "A"), _id(abc_store, "C"))
    assert _messages(result) == ["B", "C", "A"]


def test_move_below_twice_is_idempotent(abc_store, repo):
    a, c = _id(abc_store, "A"), _id(abc_store, "C")
    abc_store.move_below(a, c)
    writes = repo.writes

    assert _messages(abc_store.move_below(a, c)) == ["B", "C", "A"]
    assert repo.writes == writes


def test_move_below_backward(abc_store):
    result = abc_store.move_below(_id(abc_store, "C"), _id(abc_store, "A"))
    assert _messages(result) == ["A", "C", "B"]


def test_move_below_self_is_noop(abc_store, repo):
    b = _id(abc_store, "B")
    assert _messages(abc_store.move_below(b, b)) == ["A", "B", "C"]
    assert repo.writes == 0


def test_move_below_already_below_is_noop(abc_store, repo):
    result = abc_store.move_below(_id(abc_store, "B"), _id(abc_store, "A"))
    assert _messages(result) == ["A", "B", "C"]
    assert repo.writes == 0


def test_move_below_only_shifts_items_between(repo):
    todo_store = TodoStore(repo, [])
    for message in "ABCDE":
        todo_store.add(message)

    result = todo_store.move_below(_id(todo_store, "B"), _id(todo_store, "D"))

    assert _messages(result) == ["A", "C", "D", "B", "E"]


@pytest.mark.parametrize("missing", ["source", "target"])
def test_move_below_unknown_id(abc_store, missing):
    a = _id(abc_store, "A")
    args = ("missing", a) if missing == "source" else (a, "missing")
    with pytest.raises(TodoNotFoundError):
        abc_store.move_below(*args)
    assert _messages(abc_store.todos) == ["A", "B", "C"]


# --- list_pending ---


def test_list_pending_filters_done(abc_store):
    abc_store.remove(_id(abc_store, "B"))
    assert _messages(abc_store.list_pending()) == ["A", "C"]


# --- failed writes ---


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.add("D"),
        lambda s: s.remove(_id(s, "A")),
        lambda s: s.delete(_id(s, "A")),
        lambda s: s.move_up(_id(s, "B")),
        lambda s: s.move_down(_id(s, "B")),
        lambda s: s.move_below(_id(s, "A"), _id(s, "C")),
    ],
)
def test_failed_write_leaves_list_unchanged(abc_store, repo, operation):
    before = abc_store.todos
    repo.fail = True

    with pytest.raises(StorageError):
        operation(abc_store)

    assert abc_store.todos == before


def test_failed_write_does_not_touch_file(abc_store, repo):
    saved = repo.path.read_text(encoding="utf-8")
    repo.fail = True

    with pytest.raises(StorageError):
        abc_store.add("D")

    assert repo.path.read_text(encoding="utf-8") == saved


# --- import ---


def test_import_dump_reproduces_list(abc_store, tmp_path):
    abc_store.remove(_id(abc_store, "B"))
    dump_file = tmp_path / "dump.json"
    dump_file.write_text(
        json.dumps([t.to_dict() for t in abc_store.dump()]), encoding="utf-8"
    )

    empty = TodoStore(JsonFileRepository(tmp_path / "other.json"), [])
    result = empty.import_from(dump_file)

    assert result == abc_store.dump()


def test_import_text_lines(store, tmp_path):
    source = tmp_path / "notes.txt"
    source.write_text("Buy milk\n\n- [x] Write report\n* Call mum\n", encoding="utf-8")

    result = store.import_from(source)

    assert _messages(result) == ["Buy milk", "Write report", "Call mum"]
    assert [t.done for t in result] == [False, True, False]
    assert len({t.id for t in result}) == 3


def test_import_appends_after_existing(abc_store, tmp_path):
    source = tmp_path / "more.txt"
    source.write_text("D\nE\n", encoding="utf-8")

    assert _messages(abc_store.import_from(source)) == ["A", "B", "C", "D", "E"]


def test_import_writes_once(abc_store, repo, tmp_path):
    source = tmp_path / "more.txt"
    source.write_text("D\nE\nF\n", encoding="utf-8")

    abc_store.import_from(source)

    assert repo.writes == 1


def test_import_invalid_item_applies_nothing(abc_store, repo, tmp_path):
    source = tmp_path / "bad.json"
    source.write_text(json.dumps([{"message": "ok"}, {"message": ""}]), encoding="utf-8")

    with pytest.raises(FormatError):
        abc_store.import_from(source)

    assert _messages(abc_store.todos) == ["A", "B", "C"]
    assert repo.writes == 0


def test_import_existing_id_applies_nothing(abc_store, tmp_path):
    taken = abc_store.todos[0].to_dict()
    source = tmp_path / "dup.json"
    source.write_text(json.dumps([{"message": "new"}, taken]), encoding="utf-8")

    with pytest.raises(FormatError):
        abc_store.import_from(source)

    assert len(abc_store) == 3


def test_import_duplicate_ids_within_source(store, tmp_path):
    record = Todo.new("twice").to_dict()
    source = tmp_path / "dup.json"
    source.write_text(json.dumps([record, record]), encoding="utf-8")

    with pytest.raises(FormatError):
        store.import_from(source)

    assert len(store) == 0


def test_import_missing_file(store, tmp_path):
    with pytest.raises(StorageError):
        store.import_from(tmp_path / "nope.json")


# --- relocate ---


def test_relocate_writes_to_new_repository(abc_store, tmp_path):
    target = GzipJsonFileRepository(tmp_path / "todos.json.gz")

    abc_store.relocate(target)

    assert abc_store.repository is target
    assert target.read() == abc_store.todos


def test_relocate_failure_keeps_old_repository(abc_store, repo, tmp_path):
    target = CountingRepository(tmp_path / "new.json")
    target.fail = True

    with pytest.raises(StorageError):
        abc_store.relocate(target)

    assert abc_store.repository is repo
