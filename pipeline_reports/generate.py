from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from pipeline_reports import render, summary
from pipeline_reports.logs import LogRecord, fetch_logs, filter_last_24h
from pipeline_reports.writer import html_sibling_path, write_report

DEFAULT_LOGS_TABLE = "pipeline_logs"


class ReportFormat(str, Enum):
    """Output flavours of the pipeline log report."""

    MARKDOWN_HTML = "markdown-html"  # summary + table as .md, converted to an .html twin
    HTML_TABLE = "html-table"  # single .html table with numberOfExecution column

    @classmethod
    def parse(cls, value: Union[str, "ReportFormat"]) -> "ReportFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown report format '{value}' (expected one of: {choices})") from None

    @property
    def default_output(self) -> str:
        return "output.md" if self is ReportFormat.MARKDOWN_HTML else "output.html"


def generate_report(
    connect: Callable[[], Any],
    output_file: Optional[Union[str, Path]] = None,
    format: Union[str, ReportFormat] = ReportFormat.MARKDOWN_HTML,
    now: Optional[datetime] = None,
    table: str = DEFAULT_LOGS_TABLE,
) -> Union[List[LogRecord], List[Dict[str, Any]]]:
    """
    Build a report of the pipeline executions from the last 24 hours.

    Args:
        connect: Zero-argument callable returning an open DB-API connection
        output_file: Report path; defaults to output.md or output.html by format
        format: "markdown-html" writes output_file plus its .html twin,
            "html-table" writes a single HTML table
        now: Reference instant for the lookback window (default: current UTC time)
        table: Logs table name, optionally schema-qualified

    Returns:
        The executions within the window, for optional further use. For
        markdown-html these are the LogRecords; for html-table they are the
        table rows, each carrying numberOfExecution (see
        summary.with_execution_count)

    Failure modes:
        - Raises ValueError for an unknown format or invalid table name
        - Propagates connection and query errors; no file is written
        - Propagates write errors
        - For markdown-html, a failure while converting to HTML leaves the
          Markdown file in place and no HTML file
    """
    report_format = ReportFormat.parse(format)
    if now is None:
        now = datetime.now(timezone.utc)
    out_path = Path(output_file) if output_file is not None else Path(report_format.default_output)

    conn = connect()
    try:
        fetched = fetch_logs(conn, table)
    finally:
        conn.close()

    records = filter_last_24h(fetched, now)

    if report_format is ReportFormat.MARKDOWN_HTML:
        execution_summary = summary.summarize(records)
        report_md = render.render_markdown(execution_summary, records, generated_at=now)
        write_report(out_path, report_md)
        report_html = render.markdown_to_html(report_md)
        write_report(html_sibling_path(out_path), report_html)
    else:
        rows = summary.with_execution_count(records)
        write_report(out_path, render.render_html_table(rows))
        return rows

    return records
