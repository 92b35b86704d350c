"""Storage backends for tasknote."""

from tasknote.protocols import StorageError, TodoNotFoundError

from .schema import SCHEMA_VERSION
from .sqlite import SQLiteStore, StoreTransaction

__all__ = [
    "SCHEMA_VERSION",
    "SQLiteStore",
    "StorageError",
    "StoreTransaction",
    "TodoNotFoundError",
]
