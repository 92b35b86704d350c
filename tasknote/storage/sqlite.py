"""SQLite storage backend for tasknote.

A durable, ordered map of task id -> note text. Each public call opens its
own connection; ``transaction()`` groups several steps under one exclusive
write lock on the database file.
"""

import contextlib
import logging
import sqlite3
from pathlib import Path
from typing import Dict, Iterator

from tasknote.protocols import StorageError, TodoNotFoundError
from tasknote.types import normalize_page

from . import todos_crud
from .schema import init_db

logger = logging.getLogger(__name__)


class StoreTransaction:
    """Store view bound to one open transaction."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def get(self, task_id: str) -> str:
        note = todos_crud.get_note(self._conn, task_id)
        if note is None:
            raise TodoNotFoundError(task_id)
        return note

    def contains(self, task_id: str) -> bool:
        return todos_crud.contains(self._conn, task_id)

    def insert(self, task_id: str, note: str) -> None:
        todos_crud.insert(self._conn, task_id, note)

    def remove(self, task_id: str) -> None:
        if not todos_crud.remove(self._conn, task_id):
            raise TodoNotFoundError(task_id)


class SQLiteStore:
    """SQLite-based persistent store for task notes.

    The schema is created on construction; opening an existing database file
    picks up every record written by earlier processes.
    """

    # Milliseconds a writer waits for another process holding the database lock
    BUSY_TIMEOUT_MS = 5000

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._connect() as conn:
                init_db(conn)
        except (OSError, sqlite3.Error) as e:
            logger.error(f"Failed to initialize store at {self.db_path}: {e}")
            raise StorageError(f"Failed to initialize store at {self.db_path}: {e}") from e
        logger.debug(f"Store ready at {self.db_path}")

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute(f"PRAGMA busy_timeout={self.BUSY_TIMEOUT_MS}")
        return conn

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Context manager that commits on success, rolls back on error and
        always closes the connection."""
        conn = self._get_conn()
        try:
            yield conn
            conn.commit()
        except Exception as e:
            logger.debug(f"Transaction failed, rolling back: {e}")
            conn.rollback()
            raise
        finally:
            conn.close()

    @contextlib.contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Exclusive write transaction spanning several store steps."""
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            yield StoreTransaction(conn)

    def close(self) -> None:
        """Release store resources.

        Every operation opens and closes its own connection, so there is
        nothing held open; this exists so callers can manage the store like
        any other resource. The store stays usable afterwards.
        """
        pass  # No persistent connections to close

    # === Map operations ===

    def get(self, task_id: str) -> str:
        """Return the note for ``task_id``.

        Raises:
            TodoNotFoundError: If the id is absent.
        """
        with self._connect() as conn:
            note = todos_crud.get_note(conn, task_id)
        if note is None:
            raise TodoNotFoundError(task_id)
        return note

    def contains(self, task_id: str) -> bool:
        with self._connect() as conn:
            return todos_crud.contains(conn, task_id)

    def insert(self, task_id: str, note: str) -> None:
        """Insert or overwrite the note for ``task_id``."""
        with self._connect() as conn:
            todos_crud.insert(conn, task_id, note)

    def remove(self, task_id: str) -> None:
        """Delete ``task_id``.

        Raises:
            TodoNotFoundError: If the id is absent.
        """
        with self._connect() as conn:
            removed = todos_crud.remove(conn, task_id)
        if not removed:
            raise TodoNotFoundError(task_id)

    def paginated_list(self, page_number: int, per_page: int) -> Dict[str, str]:
        """Return one page of records in id order.

        Page 0 is read as page 1 and per_page is clamped to [1, 10]. Pages
        past the end are empty.
        """
        page_number, per_page = normalize_page(page_number, per_page)
        offset = (page_number - 1) * per_page
        with self._connect() as conn:
            return todos_crud.list_slice(conn, offset, per_page)

    def count(self) -> int:
        with self._connect() as conn:
            return todos_crud.count(conn)
