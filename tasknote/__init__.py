"""
tasknote - Persistent task-note store.

Create, fetch, page through, update and delete short notes keyed by
time-based ids, backed by SQLite.
"""

from .service import TodoService
from .storage import SQLiteStore
from .types import TodoResult

try:
    from importlib.metadata import version

    __version__ = version("tasknote")
except Exception:
    __version__ = "0.0.0"

__all__ = ["SQLiteStore", "TodoResult", "TodoService"]
