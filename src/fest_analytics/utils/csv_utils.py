"""CSV utility functions shared by every report"""

import re
from datetime import date
from typing import Any, Iterable, Mapping, NamedTuple, Optional


class ColumnHeader(NamedTuple):
    """Column descriptor; ``key`` selects the row value, ``label`` is the header text"""

    key: Optional[str]
    label: str


def escape_csv_field(value: Any) -> str:
    """
    Escape a single CSV field.

    Args:
        value: Any value; None becomes an empty field

    Returns:
        The field text, wrapped in double quotes (with embedded quotes doubled)
        when it contains a comma, a quote or a newline
    """
    if value is None:
        return ""

    text = str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def join_csv_row(cells: Iterable[Any]) -> str:
    return ",".join(escape_csv_field(cell) for cell in cells)


def array_to_csv(rows: Iterable[Mapping[str, Any]], headers: list[ColumnHeader]) -> str:
    """
    Convert row mappings to CSV text.

    The header row is always emitted so an empty report is still a valid
    CSV document. Rows are joined with a bare newline.
    """
    lines = [join_csv_row(h.label for h in headers)]
    for row in rows:
        lines.append(join_csv_row(row.get(h.key or h.label) for h in headers))
    return "\n".join(lines)


def safe_filename_part(text: str) -> str:
    """Replace every character outside [A-Za-z0-9] with an underscore"""
    return re.sub(r"[^a-zA-Z0-9]", "_", text or "")


def report_filename(report_name: str, on: Optional[date] = None) -> str:
    """Build ``<report_name>_<YYYY-MM-DD>.csv`` (today when ``on`` is omitted)."""
    on = on or date.today()
    return f"{report_name}_{on.isoformat()}.csv"
