"""CSV output."""

from __future__ import annotations

import csv
import io

from ...config import CsvLayout
from ..aggregator import RunResult
from .base import BaseRenderer

LEGACY_HEADER = ["URL", "LENGTH", "TIMESTAMP"]
DATED_HEADER = [*LEGACY_HEADER, "DATE"]


class CsvRenderer(BaseRenderer):
    """Header row followed by one quoted row per record."""

    def serialise(self, result: RunResult) -> str:
        dated = self.config.csv_layout is CsvLayout.DATED
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(DATED_HEADER if dated else LEGACY_HEADER)
        for record in result.records:
            row = [record.url, record.length, record.timestamp]
            if dated:
                row.append(record.rfc3339_date or "")
            writer.writerow(row)
        return buffer.getvalue()


__all__ = ["CsvRenderer", "DATED_HEADER", "LEGACY_HEADER"]
