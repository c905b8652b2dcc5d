from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def html_sibling_path(path: PathLike) -> Path:
    """
    Derive the HTML twin of a Markdown output path.

    "report.md" becomes "report.html". A path that does not end in ".md"
    gets ".html" appended instead ("report.txt" -> "report.txt.html").
    """
    text = os.fspath(path)
    if text.endswith(".md"):
        return Path(text[: -len(".md")] + ".html")
    return Path(text + ".html")


def write_report(path: PathLike, text: str) -> Path:
    """
    Write text to path, replacing any existing content.

    A trailing newline is added when missing. Parent directories
    must already exist; OSError propagates otherwise.
    """
    out = Path(path)
    if not text.endswith("\n"):
        text += "\n"
    out.write_text(text, encoding="utf-8")
    return out
