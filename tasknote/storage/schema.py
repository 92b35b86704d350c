"""Database schema for tasknote SQLite storage.

Contains:
- Schema DDL (SCHEMA)
- Schema version tracking (SCHEMA_VERSION)
- Database initialization (init_db)
"""

import logging
import sqlite3

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

# todos is a WITHOUT ROWID table: rows live in the primary-key B-tree, so
# iteration order is the BINARY (byte) order of the task id.
SCHEMA = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS todos (
    id TEXT PRIMARY KEY NOT NULL,
    note TEXT NOT NULL
) WITHOUT ROWID;
"""


def init_db(conn: sqlite3.Connection) -> None:
    """Create tables and record the schema version. Safe to run repeatedly."""
    conn.executescript(SCHEMA)

    row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
    if row is None:
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (SCHEMA_VERSION,))
    elif row[0] != SCHEMA_VERSION:
        logger.info(f"Updating schema version {row[0]} -> {SCHEMA_VERSION}")
        conn.execute("UPDATE schema_version SET version = ?", (SCHEMA_VERSION,))
