"""
Count report built from the placed marks.
"""

from .aggregator import (
    CountRow,
    ReportRow,
    SectionCounts,
    aggregate,
    aggregate_by_color,
    rounded_sum,
)
from .sinks import FileSink, MemorySink, ReportSink
from .writer import ReportFormat, build_report, encode_report

__all__ = [
    "CountRow",
    "ReportRow",
    "SectionCounts",
    "aggregate",
    "aggregate_by_color",
    "rounded_sum",
    "FileSink",
    "MemorySink",
    "ReportSink",
    "ReportFormat",
    "build_report",
    "encode_report",
]
