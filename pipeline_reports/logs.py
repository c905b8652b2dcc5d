from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

FETCH_LIMIT = 100
LOOKBACK = timedelta(hours=24)
SUCCESS_STATUS = "ok"

# Plain or schema-qualified identifier, e.g. "pipeline_logs" or "analytics.pipeline_logs"
_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


@dataclass(frozen=True)
class LogRecord:
    """
    One pipeline execution event read from the logs table.

    Fields:
        id: Source-assigned identifier, used as the fetch ordering key
        symbol: Pipeline/asset the execution concerns
        status: "ok" for success, anything else is a failure
        message: Diagnostic text, usually only set for failures
        timestamp: Event time as an aware UTC datetime, or None if unparsable
    """

    id: int
    symbol: str
    status: str
    message: Optional[str]
    timestamp: Optional[datetime]

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS_STATUS


def _as_utc(ts: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Coerce a source timestamp into an aware UTC datetime.

    Accepts datetime objects as returned by most drivers and ISO 8601 strings
    as stored by SQLite (a trailing "Z" is accepted). Naive values (no offset)
    are always read as UTC, never as the host's local time. A database that
    stores naive local times will see the window shifted by the host's UTC
    offset; store UTC or include an offset to avoid that.

    Returns None for null or unparsable values. Callers must treat None as
    outside every time window: such rows are excluded from reports.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, str):
        try:
            return _as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def validate_table_name(table: str) -> str:
    """
    Check that table is a plain SQL identifier, optionally schema-qualified.

    The name is interpolated into the query text, so anything else is rejected.

    Raises:
        ValueError: If table is not a valid identifier
    """
    if not _TABLE_NAME_RE.match(table or ""):
        raise ValueError(f"Invalid logs table name: {table!r}")
    return table


def _record_from_row(row: Dict[str, Any]) -> LogRecord:
    return LogRecord(
        id=int(row["id"]),
        symbol=str(row["symbol"]),
        status=str(row["status"]),
        message=row.get("message"),
        timestamp=parse_timestamp(row["timestamp"]),
    )


def fetch_logs(conn: Any, table: str) -> List[LogRecord]:
    """
    Read the log table through an open DB-API connection.

    Args:
        conn: Open DB-API 2.0 connection (sqlite3, psycopg, ...)
        table: Logs table name, optionally schema-qualified

    Returns:
        At most FETCH_LIMIT records ordered by id ascending

    Failure modes:
        - Raises ValueError for an invalid table name, before querying
        - Propagates driver errors (missing table, lost connection); no retry
        - Raises KeyError if a required column is missing from the table
    """
    query = f"SELECT * FROM {validate_table_name(table)} ORDER BY id ASC LIMIT {FETCH_LIMIT}"

    cursor = conn.cursor()
    try:
        cursor.execute(query)
        columns = [col[0] for col in cursor.description]
        rows = cursor.fetchall()
    finally:
        cursor.close()

    return [_record_from_row(dict(zip(columns, row))) for row in rows]


def filter_last_24h(records: Iterable[LogRecord], now: datetime) -> List[LogRecord]:
    """
    Keep records whose timestamp falls within the 24 hours ending at now.

    The window is inclusive at its start (timestamp >= now - 24h). Records
    with an unparsable timestamp (None) are excluded.
    """
    threshold = _as_utc(now) - LOOKBACK
    return [r for r in records if r.timestamp is not None and r.timestamp >= threshold]
