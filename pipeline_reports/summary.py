from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from pipeline_reports.logs import LogRecord

# Column order of the html-table report
TABLE_COLUMNS = ["id", "symbol", "status", "message", "timestamp", "numberOfExecution"]


@dataclass
class ExecutionSummary:
    """
    Counts over the executions of one lookback window.

    Invariants:
      - total_executions == successful_executions + failed_executions
      - error_messages has no duplicates and no None entries
    """

    total_executions: int
    successful_executions: int
    failed_executions: int
    error_messages: List[str] = field(default_factory=list)


def summarize(records: Sequence[LogRecord]) -> ExecutionSummary:
    """
    Count successes and failures and collect distinct failure messages.

    Messages keep the order in which they first appear. Null messages of
    failed rows are skipped.
    """
    successful = 0
    failed = 0
    seen_messages: Dict[str, None] = {}

    for record in records:
        if record.succeeded:
            successful += 1
            continue

        failed += 1
        if record.message is not None:
            seen_messages.setdefault(record.message, None)

    return ExecutionSummary(
        total_executions=len(records),
        successful_executions=successful,
        failed_executions=failed,
        error_messages=list(seen_messages),
    )


def with_execution_count(records: Sequence[LogRecord]) -> List[Dict[str, Any]]:
    """
    Project records to table rows and append numberOfExecution.

    numberOfExecution is the size of the whole set, repeated on every row.
    It is a per-run figure, not a per-row attribute.
    """
    count = len(records)
    return [
        {
            "id": r.id,
            "symbol": r.symbol,
            "status": r.status,
            "message": r.message,
            "timestamp": r.timestamp,
            "numberOfExecution": count,
        }
        for r in records
    ]
