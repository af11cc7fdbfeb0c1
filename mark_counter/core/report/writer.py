"""
Report serialization.

Reports are comma separated, one row per line, with a fixed header. By
default labels are written as-is: a label containing a comma, quote or line
break produces a malformed report. This is a known defect kept for output
compatibility; pass ``escape=True`` to quote such fields instead.
"""

import csv
import io
import logging
from enum import Enum
from typing import Iterable, List, Sequence

from ..marking.state import ColorRegistry, Mark
from .aggregator import CountRow, ReportRow, aggregate, aggregate_by_color

logger = logging.getLogger(__name__)

DELIMITER = ","
LINE_TERMINATOR = "\n"

GENERAL_HEADER = (
    "No",
    "Color Label",
    "Thickness (mm)",
    "Whole",
    "0.5 Vertical",
    "0.5 Horizontal",
    "Sum",
)
REDUCED_HEADER = ("No", "Label", "Count")


class ReportFormat(Enum):
    GENERAL = "general"
    REDUCED = "reduced"


def general_fields(row: ReportRow) -> List[str]:
    return [
        str(row.index),
        row.color_label,
        str(row.thickness.value) if row.thickness else "",
        str(row.whole),
        str(row.half_vertical),
        str(row.half_horizontal),
        str(row.sum),
    ]


def reduced_fields(row: CountRow) -> List[str]:
    return [str(row.index), row.label, str(row.count)]


def needs_escaping(value: str) -> bool:
    return any(ch in value for ch in (DELIMITER, '"', "\n", "\r"))


def write_rows(
    header: Sequence[str], rows: Iterable[Sequence[str]], escape: bool = False
) -> str:
    """
    Join a header and rows into report text.

    Args:
        header: Column names
        rows: Field values, already converted to strings
        escape: Quote fields containing the delimiter, quotes or line breaks

    Returns:
        Report text, every line terminated by a newline
    """
    if escape:
        buffer = io.StringIO()
        writer = csv.writer(
            buffer, delimiter=DELIMITER, lineterminator=LINE_TERMINATOR
        )
        writer.writerow(header)
        writer.writerows(rows)
        return buffer.getvalue()

    lines = [DELIMITER.join(header)]
    for fields in rows:
        unsafe = [f for f in fields if needs_escaping(f)]
        if unsafe:
            logger.warning(
                f"Report field {unsafe[0]!r} contains a delimiter or line break "
                "and is written unescaped"
            )
        lines.append(DELIMITER.join(fields))
    return LINE_TERMINATOR.join(lines) + LINE_TERMINATOR


def build_report(
    marks: Iterable[Mark],
    registry: ColorRegistry,
    fmt: ReportFormat = ReportFormat.GENERAL,
    escape: bool = False,
) -> str:
    """Aggregate ``marks`` and serialize them in the requested layout."""
    fmt = ReportFormat(fmt)
    if fmt is ReportFormat.REDUCED:
        rows = [reduced_fields(r) for r in aggregate_by_color(marks, registry)]
        return write_rows(REDUCED_HEADER, rows, escape=escape)
    rows = [general_fields(r) for r in aggregate(marks, registry)]
    return write_rows(GENERAL_HEADER, rows, escape=escape)


def encode_report(text: str) -> bytes:
    return text.encode("utf-8")
