"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mynd.core.repository import JsonFileRepository
from mynd.core.service import TodoStore


@pytest.fixture(autouse=True)
def mynd_home(monkeypatch, tmp_path):
    """Point the mynd home directory at a temp dir for every test."""
    home = tmp_path / "mynd_home"
    monkeypatch.setenv("MYND_HOME", str(home))
    monkeypatch.delenv("MYND_LOG_LEVEL", raising=False)
    yield home


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "todos.json"


@pytest.fixture
def store(data_path):
    """A loaded, empty store backed by a JSON file in tmp_path."""
    todo_store = TodoStore(JsonFileRepository(data_path))
    todo_store.load()
    return todo_store
