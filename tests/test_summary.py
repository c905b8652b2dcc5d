"""Tests for pipeline_reports/summary.py"""

from datetime import timedelta

from pipeline_reports.logs import LogRecord
from pipeline_reports.summary import TABLE_COLUMNS, summarize, with_execution_count
from tests.conftest import NOW


def _record(id=1, status="ok", message=None) -> LogRecord:
    return LogRecord(id=id, symbol="SYM", status=status, message=message, timestamp=NOW - timedelta(hours=1))


class TestSummarize:
    def test_empty(self):
        result = summarize([])
        assert result.total_executions == 0
        assert result.successful_executions == 0
        assert result.failed_executions == 0
        assert result.error_messages == []

    def test_worked_example(self):
        result = summarize([_record(id=1), _record(id=2, status="fail", message="timeout")])
        assert result.total_executions == 2
        assert result.successful_executions == 1
        assert result.failed_executions == 1
        assert result.error_messages == ["timeout"]

    def test_any_non_ok_status_is_failure(self):
        result = summarize([_record(status="error"), _record(status="OK"), _record(status="")])
        assert result.failed_executions == 3
        assert result.total_executions == result.successful_executions + result.failed_executions

    def test_error_messages_distinct_in_first_seen_order(self):
        records = [
            _record(status="fail", message="disk full"),
            _record(status="fail", message="timeout"),
            _record(status="fail", message="disk full"),
            _record(status="fail", message=None),
        ]
        assert summarize(records).error_messages == ["disk full", "timeout"]

    def test_messages_of_successful_rows_ignored(self):
        records = [_record(status="ok", message="warmup slow"), _record(status="fail", message="timeout")]
        assert summarize(records).error_messages == ["timeout"]


class TestWithExecutionCount:
    def test_count_repeated_on_every_row(self):
        rows = with_execution_count([_record(id=1), _record(id=2), _record(id=3)])
        assert [row["numberOfExecution"] for row in rows] == [3, 3, 3]

    def test_projection_columns(self):
        rows = with_execution_count([_record(id=7, status="fail", message="boom")])
        assert list(rows[0]) == TABLE_COLUMNS
        assert rows[0]["id"] == 7
        assert rows[0]["message"] == "boom"

    def test_empty(self):
        assert with_execution_count([]) == []
