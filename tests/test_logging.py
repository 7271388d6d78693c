"""
Tests for JSONL log files and logging setup.
"""

import json
import logging
import os
import time

import pytest

from mynd.logging import JSONLHandler, configure_logging, prune_old_logs


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_jsonl_handler_writes_entries(tmp_path):
    logger = logging.getLogger("mynd.test.jsonl")
    handler = JSONLHandler(tmp_path / "logs")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        logger.info("Added todo %s", "abc")
    finally:
        logger.removeHandler(handler)
        handler.close()

    files = list((tmp_path / "logs").glob("*.jsonl"))
    assert len(files) == 1
    entry = json.loads(files[0].read_text(encoding="utf-8").strip())
    assert entry["level"] == "INFO"
    assert entry["logger"] == "mynd.test.jsonl"
    assert entry["message"] == "Added todo abc"


def test_prune_old_logs(tmp_path):
    old = tmp_path / "2000-01-01.jsonl"
    new = tmp_path / "today.jsonl"
    other = tmp_path / "notes.txt"
    for path in (old, new, other):
        path.write_text("{}\n", encoding="utf-8")
    ancient = time.time() - 30 * 86400
    os.utime(old, (ancient, ancient))
    os.utime(other, (ancient, ancient))

    assert prune_old_logs(tmp_path, retention_days=7) == 1
    assert not old.exists()
    assert new.exists()
    assert other.exists()


def test_prune_missing_dir(tmp_path):
    assert prune_old_logs(tmp_path / "nope") == 0


def test_configure_logging_level(restore_root_logger, mynd_home):
    configure_logging(level="INFO")

    assert restore_root_logger.level == logging.INFO
    assert any(isinstance(h, JSONLHandler) for h in restore_root_logger.handlers)


def test_configure_logging_verbose_forces_debug(restore_root_logger):
    from rich.logging import RichHandler

    configure_logging(level="ERROR", verbose=True, log_to_file=False)

    assert restore_root_logger.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)


def test_configure_logging_invalid_level_falls_back(restore_root_logger):
    configure_logging(level="CHATTY", log_to_file=False)
    assert restore_root_logger.level == logging.WARNING
