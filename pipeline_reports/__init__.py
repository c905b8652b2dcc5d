"""
Pipeline log reports.

Reads the most recent pipeline execution logs from a database, keeps the
last 24 hours, and writes a static report:
  - Markdown report with summary counts and error messages, plus an HTML twin
  - Single-file HTML table of the executions

Outputs are reproducible for a fixed reference instant and unchanged source table.
"""

__version__ = "0.1.0"
