"""Centralized logging configuration for mynd.

Both front ends (CLI and interactive session) call configure_logging() once
at startup. Log records always go to daily JSONL files under
~/.mynd/logs/; with --verbose they are also shown on stderr through rich.

Logging Levels:
- DEBUG: Loads, no-op operations, file writes
- INFO: Every persisted change to the list
- WARNING: Errors returned through the command surface
- ERROR: Unexpected failures
"""

import json
import logging
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, TextIO

from .core.constants import LOG_LEVELS, LOG_LEVEL_ENV_VAR, LOG_RETENTION_DAYS


def prune_old_logs(logs_dir: Path, retention_days: int = LOG_RETENTION_DAYS) -> int:
    """
    Delete .jsonl log files older than the retention period.

    Returns:
        Number of files deleted
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now(timezone.utc) - timedelta(days=retention_days)
    deleted = 0

    for entry in logs_dir.iterdir():
        if not entry.is_file() or entry.suffix != ".jsonl":
            continue
        try:
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, timezone.utc)
            if mtime < cutoff:
                entry.unlink()
                deleted += 1
        except OSError:
            pass  # Another process may have pruned it already

    return deleted


class JSONLHandler(logging.Handler):
    """Handler writing one JSON object per record to logs/YYYY-MM-DD.jsonl.

    Files rotate daily; files older than the retention period are pruned
    when a new day's file is opened.
    """

    def __init__(self, logs_dir: Path, retention_days: int = LOG_RETENTION_DAYS):
        super().__init__()
        self._logs_dir = logs_dir
        self._retention_days = retention_days
        self._current_date: Optional[str] = None
        self._file: Optional[TextIO] = None

    def _get_log_file(self) -> TextIO:
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        if self._current_date != today or self._file is None:
            if self._file:
                self._file.close()
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            self._current_date = today
            self._file = (self._logs_dir / f"{today}.jsonl").open("a", encoding="utf-8")
            prune_old_logs(self._logs_dir, self._retention_days)
        return self._file

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "pid": record.process,
                "message": record.getMessage(),
            }
            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                entry["exception"] = formatter.formatException(record.exc_info)

            log_file = self._get_log_file()
            log_file.write(json.dumps(entry) + "\n")
            log_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None
        super().close()


def configure_logging(
    level: Optional[str] = None,
    verbose: bool = False,
    log_to_file: bool = True,
) -> None:
    """
    Configure logging for mynd.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. If None, uses MYND_LOG_LEVEL
            or WARNING. --verbose forces DEBUG.
        verbose: Also print records to stderr with rich
        log_to_file: Write records to ~/.mynd/logs/
    """
    from .config import get_logs_path

    if verbose:
        level = "DEBUG"
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    if level not in LOG_LEVELS:
        level = "WARNING"

    handlers: list[logging.Handler] = []

    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
        )
        console_handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        handlers.append(console_handler)

    if log_to_file:
        handlers.append(JSONLHandler(get_logs_path()))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=getattr(logging, level), handlers=handlers, force=True)
