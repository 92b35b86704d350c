"""Todo CRUD operations on an open SQLite connection.

All functions receive the connection explicitly so the same code serves
single-statement calls and multi-step transactions.
"""

import logging
import sqlite3
from typing import Dict, Optional

logger = logging.getLogger(__name__)


def get_note(conn: sqlite3.Connection, task_id: str) -> Optional[str]:
    """Return the note for ``task_id`` or None if absent."""
    row = conn.execute("SELECT note FROM todos WHERE id = ?", (task_id,)).fetchone()
    return row[0] if row is not None else None


def contains(conn: sqlite3.Connection, task_id: str) -> bool:
    row = conn.execute("SELECT 1 FROM todos WHERE id = ?", (task_id,)).fetchone()
    return row is not None


def insert(conn: sqlite3.Connection, task_id: str, note: str) -> None:
    """Insert or overwrite the note for ``task_id``."""
    conn.execute("INSERT OR REPLACE INTO todos (id, note) VALUES (?, ?)", (task_id, note))


def remove(conn: sqlite3.Connection, task_id: str) -> bool:
    """Delete ``task_id``. Returns True if a row was removed."""
    cur = conn.execute("DELETE FROM todos WHERE id = ?", (task_id,))
    return cur.rowcount > 0


def list_slice(conn: sqlite3.Connection, offset: int, limit: int) -> Dict[str, str]:
    """Return ``limit`` records after skipping ``offset``, in id order."""
    rows = conn.execute(
        "SELECT id, note FROM todos ORDER BY id LIMIT ? OFFSET ?",
        (limit, offset),
    ).fetchall()
    return {row[0]: row[1] for row in rows}


def count(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0]
