#!/usr/bin/env python3
"""
Pipeline log report CLI.

Usage:
    python -m pipeline_reports.run_report                          # Markdown + HTML twin
    python -m pipeline_reports.run_report --format html-table      # single HTML table
    python -m pipeline_reports.run_report --output logs/today.md
    python -m pipeline_reports.run_report --help

Environment variables:
    PIPELINE_REPORTS_SQLITE_PATH: Path to the logs database (default: data/pipeline_logs.sqlite)
    PIPELINE_REPORTS_LOGS_TABLE: Logs table name (default: pipeline_logs)
    PIPELINE_REPORTS_FORMAT: Default report format (default: markdown-html)
"""

from __future__ import annotations

import argparse
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, List, Optional

from pipeline_reports import config, db, generate
from pipeline_reports.logs import SUCCESS_STATUS
from pipeline_reports.writer import html_sibling_path

PREFIX = "[pipeline-report]"


def _status_of(execution: Any) -> str:
    """Status of a returned LogRecord or html-table row."""
    if isinstance(execution, dict):
        return execution["status"]
    return execution.status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a report of pipeline executions from the last 24 hours",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in generate.ReportFormat],
        default=None,
        help="Report format (default: $PIPELINE_REPORTS_FORMAT or markdown-html)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output path (default: output.md for markdown-html, output.html for html-table)",
    )
    parser.add_argument(
        "--table",
        type=str,
        default=None,
        help="Logs table to read (default: $PIPELINE_REPORTS_LOGS_TABLE or pipeline_logs)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for report generation.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    try:
        cfg = config.load_config_from_env()
    except RuntimeError as e:
        print(f"{PREFIX} ERROR: {e}", file=sys.stderr)
        return 1

    report_format = generate.ReportFormat.parse(args.format) if args.format else cfg.report_format
    table = args.table or cfg.logs_table
    output_file = args.output or report_format.default_output
    now = datetime.now(timezone.utc)

    print(f"{PREFIX} Reading {table} from {cfg.sqlite_path} (window ending {now.isoformat()})...")

    try:
        executions = generate.generate_report(
            db.sqlite_connector(cfg.sqlite_path),
            output_file=output_file,
            format=report_format,
            now=now,
            table=table,
        )
    except Exception as e:
        print(f"{PREFIX} ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return 1

    total = len(executions)
    successful = sum(1 for e in executions if _status_of(e) == SUCCESS_STATUS)

    print(f"{PREFIX} Generated artifacts:")
    print(f"{PREFIX}   - {output_file}")
    if report_format is generate.ReportFormat.MARKDOWN_HTML:
        print(f"{PREFIX}   - {html_sibling_path(output_file)}")
    print(f"{PREFIX}")
    print(f"{PREFIX} Summary:")
    print(f"{PREFIX}   Total executions: {total}")
    print(f"{PREFIX}   Successful: {successful}")
    print(f"{PREFIX}   Failed: {total - successful}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
