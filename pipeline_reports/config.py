from __future__ import annotations

import os
from dataclasses import dataclass

from pipeline_reports.generate import DEFAULT_LOGS_TABLE, ReportFormat
from pipeline_reports.logs import validate_table_name


@dataclass
class ReportConfig:
    sqlite_path: str
    logs_table: str
    report_format: ReportFormat


def load_config_from_env() -> ReportConfig:
    """
    Read report settings from PIPELINE_REPORTS_* environment variables.

    Raises:
        RuntimeError: If a variable holds an invalid value
    """
    logs_table = os.environ.get("PIPELINE_REPORTS_LOGS_TABLE", "").strip() or DEFAULT_LOGS_TABLE
    try:
        validate_table_name(logs_table)
    except ValueError as e:
        raise RuntimeError(f"Invalid PIPELINE_REPORTS_LOGS_TABLE: {e}") from e

    raw_format = os.environ.get("PIPELINE_REPORTS_FORMAT", "").strip() or ReportFormat.MARKDOWN_HTML.value
    try:
        report_format = ReportFormat.parse(raw_format)
    except ValueError as e:
        raise RuntimeError(f"Invalid PIPELINE_REPORTS_FORMAT: {e}") from e

    return ReportConfig(
        sqlite_path=os.environ.get("PIPELINE_REPORTS_SQLITE_PATH", "data/pipeline_logs.sqlite"),
        logs_table=logs_table,
        report_format=report_format,
    )
