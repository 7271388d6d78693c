"""
Tests for todo reference resolution and message joining.
"""

from mynd.core.models import Todo
from mynd.utils import join_message, resolve_todo_ref


def _todos():
    return [
        Todo(id="aaaa1111" + "0" * 24, message="first", created_at="2024-01-01T00:00:00+00:00"),
        Todo(id="aaaa2222" + "0" * 24, message="second", created_at="2024-01-01T00:00:00+00:00"),
        Todo(id="bbbb3333" + "0" * 24, message="third", created_at="2024-01-01T00:00:00+00:00"),
    ]


def test_exact_id():
    todos = _todos()
    assert resolve_todo_ref(todos, todos[1].id) == todos[1].id


def test_position_is_one_based():
    todos = _todos()
    assert resolve_todo_ref(todos, "1") == todos[0].id
    assert resolve_todo_ref(todos, " 3 ") == todos[2].id


def test_position_out_of_range_passes_through():
    assert resolve_todo_ref(_todos(), "4") == "4"
    assert resolve_todo_ref(_todos(), "0") == "0"


def test_unique_prefix():
    todos = _todos()
    assert resolve_todo_ref(todos, "bbbb") == todos[2].id
    assert resolve_todo_ref(todos, "AAAA2") == todos[1].id


def test_ambiguous_or_short_prefix_passes_through():
    assert resolve_todo_ref(_todos(), "aaaa") == "aaaa"
    assert resolve_todo_ref(_todos(), "bbb") == "bbb"


def test_join_message():
    assert join_message(["Buy", "milk"]) == "Buy milk"
    assert join_message([]) == ""


def test_prefix_matches_uppercase_ids():
    todo = Todo(id="IMPORTED-0001", message="from a file", created_at="2024-01-01T00:00:00+00:00")
    assert resolve_todo_ref([todo], "impo") == todo.id
    assert resolve_todo_ref([todo], "IMPORTED") == todo.id
