"""
Tests for the interactive session: command dispatch against one in-memory list.
"""

import json

import pytest

from mynd.commands import open_surface
from mynd.repl.main import execute_command, repl_context, run_repl
from mynd.repl.parser import parse_command


@pytest.fixture(autouse=True)
def fresh_session(monkeypatch):
    """Each test gets its own session state."""
    monkeypatch.setattr(repl_context, "surface", None)


def run(line):
    return execute_command(parse_command(line))


def messages():
    return [t.message for t in repl_context.todos()]


def test_add_and_list(capsys):
    run("add Buy milk")
    run('add "Call mum"')
    run("ls")

    assert messages() == ["Buy milk", "Call mum"]
    out = capsys.readouterr().out
    assert "Call mum" in out
    assert "2 pending, 0 done" in out


def test_done_and_clean():
    run("add a")
    run("add b")
    run("done 1")

    assert [t.done for t in repl_context.todos()] == [True, False]

    run("clean")
    assert messages() == ["b"]


def test_reordering():
    for message in ("A", "B", "C"):
        run(f"add {message}")

    run("below 1 3")
    assert messages() == ["B", "C", "A"]

    run("up 2")
    assert messages() == ["C", "B", "A"]

    run("down 1")
    assert messages() == ["B", "C", "A"]

    run("rm 3")
    assert messages() == ["B", "C"]


def test_errors_are_reported_and_session_continues(capsys):
    assert run("done 5") is True
    assert run("add") is True
    assert run("frobnicate") is True

    out = capsys.readouterr().out
    assert "Error:" in out
    assert "Unknown command" in out


def test_exit_commands():
    assert run("exit") is False
    assert run("QUIT") is False
    assert run("") is True


def test_session_keeps_its_copy_until_load():
    run("add mine")

    other = open_surface()
    other.invoke("add", {"message": "from the cli"})

    run("ls")
    assert messages() == ["mine"]

    run("load")
    assert messages() == ["mine", "from the cli"]


def test_dump_prints_json(capsys):
    run("add one")
    capsys.readouterr()

    run("dump")

    data = json.loads(capsys.readouterr().out)
    assert [t["message"] for t in data] == ["one"]


def test_import(tmp_path):
    source = tmp_path / "list.txt"
    source.write_text("x\n- [x] y\n", encoding="utf-8")

    run(f'import "{source}"')

    assert messages() == ["x", "y"]


def test_config(capsys):
    run("config log_level info")
    run("config log_level")

    assert "INFO" in capsys.readouterr().out


def test_run_repl_without_tty(monkeypatch, capsys):
    lines = iter(["add from input", "ls", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    run_repl()

    assert messages() == ["from input"]
    assert "Goodbye" in capsys.readouterr().out


def test_run_repl_ends_on_eof(monkeypatch, capsys):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)

    run_repl()

    assert "Goodbye" in capsys.readouterr().out
