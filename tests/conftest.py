"""Pytest configuration and fixtures for pipeline report tests."""

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional, Tuple

import pytest

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

Row = Tuple[int, str, str, Optional[str], Optional[str]]


def ts(hours_ago: float) -> str:
    """SQLite-style text timestamp, hours before NOW."""
    return (NOW - timedelta(hours=hours_ago)).strftime("%Y-%m-%d %H:%M:%S")


def create_logs_db(path: Path, rows: Iterable[Row], table: str = "pipeline_logs") -> Path:
    conn = sqlite3.connect(str(path))
    try:
        conn.execute(
            f"""
            CREATE TABLE {table} (
                id INTEGER PRIMARY KEY,
                symbol TEXT NOT NULL,
                status TEXT NOT NULL,
                message TEXT,
                timestamp TEXT
            )
            """
        )
        conn.executemany(
            f"INSERT INTO {table} (id, symbol, status, message, timestamp) VALUES (?, ?, ?, ?, ?)",
            list(rows),
        )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def sample_rows() -> list:
    """Rows from the worked example: two inside the window, one 30h old."""
    return [
        (1, "AAPL", "ok", None, ts(1)),
        (2, "MSFT", "fail", "timeout", ts(2)),
        (3, "GOOG", "ok", None, ts(30)),
    ]


@pytest.fixture
def logs_db(tmp_path: Path, sample_rows: list) -> Path:
    return create_logs_db(tmp_path / "logs.sqlite", sample_rows)


@pytest.fixture
def empty_logs_db(tmp_path: Path) -> Path:
    return create_logs_db(tmp_path / "empty.sqlite", [])


class TrackingConnection:
    """Wraps a connection and records whether close() was called."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self.closed = False

    def cursor(self):
        return self._conn.cursor()

    def close(self) -> None:
        self.closed = True
        self._conn.close()


@pytest.fixture
def tracking_connector(logs_db: Path):
    """Connector returning a TrackingConnection; the last one is kept on .last."""

    def connect() -> TrackingConnection:
        connect.last = TrackingConnection(sqlite3.connect(str(logs_db)))
        return connect.last

    connect.last = None
    return connect
