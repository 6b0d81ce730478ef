"""
SQLite database integration and simple migration system.

This module provides a connection factory (``get_connection``), a
cursor context manager that commits on success (``get_cursor``) and
``init_db``, which applies pending schema migrations.  Connections are
short lived: callers open one per operation and close it before
returning, so concurrent requests share nothing but the database file
and SQLite's own locking.

Applied migration versions are stored in the ``migrations`` table and
new migrations run in ascending order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)

# Versioned schema changes.  Append new entries with an incremented
# version number; never edit one that has shipped.
MIGRATIONS: List[Tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS hosting_slots (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            host_name TEXT NOT NULL,
            host_address TEXT NOT NULL,
            hosting_date DATE NOT NULL UNIQUE,
            additional_notes TEXT,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_hosting_date ON hosting_slots(hosting_date);
        """,
    ),
    (
        2,
        """
        -- Slots gained a start time after the first release.  Rows that
        -- predate it keep an empty value until they are next updated.
        ALTER TABLE hosting_slots ADD COLUMN start_time TEXT NOT NULL DEFAULT '';
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the absolute path of the SQLite database file.

    Absolute paths are returned unchanged; relative ones are resolved
    against the project root (the directory containing the
    ``hosting_scheduler_api`` package).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_path: str, timeout: float = 5.0) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    ``timeout`` is SQLite's busy timeout in seconds: a statement that
    cannot obtain the database lock within it fails with
    ``sqlite3.OperationalError``.  Rows are returned as ``sqlite3.Row``
    so columns can be accessed by name.
    """
    conn = sqlite3.connect(database_path, timeout=timeout)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_path: str, timeout: float = 5.0) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(database_path, timeout)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(database_path: str, timeout: float = 5.0) -> int:
    """Create the database if needed and apply pending migrations.

    Returns the schema version after all migrations have been applied.
    """
    Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    with get_cursor(database_path, timeout) as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s to %s", version, database_path)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
    return current_version
