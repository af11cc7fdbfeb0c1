"""
Destinations for exported reports.

The core only produces bytes; a sink decides where they go.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..errors import SinkError

logger = logging.getLogger(__name__)


class ReportSink:
    """Base class for report destinations."""

    def export(self, payload: bytes):
        raise NotImplementedError


class FileSink(ReportSink):
    """Writes the report to a file, replacing any previous content."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def export(self, payload: bytes):
        try:
            self.path.write_bytes(payload)
        except OSError as e:
            raise SinkError(f"Could not write report to {self.path}: {e}") from e
        logger.info(f"Saved report to {self.path}")

    def __repr__(self):
        return f"FileSink({str(self.path)!r})"


class MemorySink(ReportSink):
    """Keeps every exported payload in memory."""

    def __init__(self):
        self.payloads: List[bytes] = []

    def export(self, payload: bytes):
        self.payloads.append(payload)

    @property
    def last(self) -> bytes:
        return self.payloads[-1]
