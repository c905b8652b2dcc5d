from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable


def connect_sqlite(sqlite_path: str) -> sqlite3.Connection:
    """
    Open a read-only connection to a SQLite logs database.

    Raises:
        RuntimeError: If the database file does not exist
        sqlite3.Error: If the file cannot be opened as a database
    """
    if not Path(sqlite_path).exists():
        raise RuntimeError(f"Database not found at {sqlite_path}")
    uri = Path(sqlite_path).resolve().as_uri() + "?mode=ro"
    return sqlite3.connect(uri, uri=True)


def sqlite_connector(sqlite_path: str) -> Callable[[], sqlite3.Connection]:
    """Bind a database path into a zero-argument connector for generate_report."""
    return lambda: connect_sqlite(sqlite_path)
