"""Logging setup for tasknote.

Two outputs:
- ``{data_dir}/logs/local-{date}.log``: the ``tasknote`` logger hierarchy
- ``{data_dir}/logs/todo-events-{date}.log``: one line per store mutation
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from tasknote.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _log_dir(data_dir: Optional[Path] = None) -> Path:
    log_dir = (data_dir or get_settings().data_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _today() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def setup_tasknote_logging(level: str = "INFO", data_dir: Optional[Path] = None) -> logging.Logger:
    """Configure the ``tasknote`` logger.

    Adds a daily file handler; at DEBUG also echoes to stderr. Unknown level
    names fall back to INFO. Calling twice does not duplicate handlers.
    """
    logger = logging.getLogger("tasknote")
    resolved = getattr(logging, str(level).upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)

    formatter = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_file = _log_dir(data_dir) / f"local-{_today()}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )
    if resolved <= logging.DEBUG and not has_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger


def log_todo_event(event_type: str, details: str, data_dir: Optional[Path] = None) -> None:
    """Append one line to the todo-events log."""
    event_file = _log_dir(data_dir) / f"todo-events-{_today()}.log"
    timestamp = datetime.now(timezone.utc).isoformat()
    with open(event_file, "a", encoding="utf-8") as f:
        f.write(f"{timestamp} | {event_type} | {details}\n")


def log_create(task_id: str, note_len: int, data_dir: Optional[Path] = None) -> None:
    log_todo_event("create", f"id={task_id}, note_chars={note_len}", data_dir)


def log_update(task_id: str, note_len: int, data_dir: Optional[Path] = None) -> None:
    log_todo_event("update", f"id={task_id}, note_chars={note_len}", data_dir)


def log_delete(task_id: str, data_dir: Optional[Path] = None) -> None:
    log_todo_event("delete", f"id={task_id}", data_dir)
