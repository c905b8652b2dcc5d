from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

from pipeline_reports.logs import LogRecord
from pipeline_reports.summary import TABLE_COLUMNS, ExecutionSummary

REPORT_TITLE = "Pipeline Logs - Last 24 Hours"
MARKDOWN_COLUMNS = ["id", "symbol", "status", "message", "timestamp"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _get_template_env() -> Environment:
    """Create Jinja2 environment with templates directory."""
    templates_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _format_cell(value: Any) -> str:
    """Format a single table value; None renders as an empty cell."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    return str(value)


def markdown_table(records: Sequence[LogRecord]) -> str:
    """
    Build a pipe-delimited Markdown table, one row per record.

    Cell values are joined as-is. A value containing a literal "|" splits
    into extra cells and corrupts the table; this is a known limitation of
    the format and is left unescaped.
    """
    lines = [
        "| " + " | ".join(MARKDOWN_COLUMNS) + " |",
        "| " + " | ".join("---" for _ in MARKDOWN_COLUMNS) + " |",
    ]
    for record in records:
        cells = [_format_cell(getattr(record, col)) for col in MARKDOWN_COLUMNS]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def render_markdown(
    summary: ExecutionSummary,
    records: Sequence[LogRecord],
    generated_at: datetime,
) -> str:
    """
    Render the Markdown report with front matter.

    Args:
        summary: Counts and error messages for the window
        records: Filtered records, rendered as the detailed table
        generated_at: Reference instant, printed in the header and front matter

    Returns:
        Markdown string ready to write to file

    Failure modes:
        - Raises jinja2.TemplateError if template is malformed
        - Raises if templates/report.md.j2 is missing
    """
    env = _get_template_env()
    template = env.get_template("report.md.j2")
    return template.render(
        title=REPORT_TITLE,
        generated_at=generated_at.strftime(TIMESTAMP_FORMAT),
        summary=summary,
        table=markdown_table(records) if records else None,
    )


def markdown_to_html(markdown_text: str) -> str:
    """
    Convert the Markdown report to a standalone HTML page.

    The front matter is consumed by the meta extension; its title becomes the
    page title. Pipe tables are rendered by the tables extension.

    Field values are not escaped on this path. Besides the "|" caveat of
    markdown_table, raw HTML in a message (e.g. "<b>") passes through
    Python-Markdown into the page as markup. render_html_table escapes the
    same values, so the two formats differ here.

    Failure modes:
        - Raises jinja2.TemplateError if template is malformed
        - Raises if templates/report.html.j2 is missing
    """
    md = markdown.Markdown(extensions=["meta", "tables"], output_format="html")
    body = md.convert(markdown_text)
    meta: Dict[str, List[str]] = getattr(md, "Meta", {})

    title: Optional[str] = None
    if meta.get("title"):
        title = meta["title"][0].strip().strip('"')

    env = _get_template_env()
    template = env.get_template("report.html.j2")
    return template.render(title=title or REPORT_TITLE, body=body)


def render_html_table(rows: Sequence[Dict[str, Any]]) -> str:
    """
    Render table rows as a single HTML document with default styling.

    Args:
        rows: Rows produced by summary.with_execution_count

    Returns:
        Complete HTML string; zero rows yields a header-only table
    """
    env = _get_template_env()
    template = env.get_template("table.html.j2")
    return template.render(
        title=REPORT_TITLE,
        columns=TABLE_COLUMNS,
        rows=[[_format_cell(row[col]) for col in TABLE_COLUMNS] for row in rows],
    )
