"""Parsing and stateless filtering of archive index lines."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone

import structlog

from ..config import RunConfig

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
TIMESTAMP_LENGTH = 14
BROWSABLE_PREFIX = "https://web.archive.org/web"


@dataclass(frozen=True, slots=True)
class ArchiveRecord:
    """One snapshot entry from the archive index."""

    url: str
    length: str
    timestamp: str
    date: datetime | None = None

    @classmethod
    def from_fields(cls, url: str, length: str, timestamp: str) -> "ArchiveRecord":
        return cls(url=url, length=length, timestamp=timestamp, date=parse_timestamp(timestamp))

    @property
    def browsable_url(self) -> str:
        """Link replaying this snapshot through the archive viewer."""

        return f"{BROWSABLE_PREFIX}/{self.timestamp}/{self.url}"

    @property
    def rfc3339_date(self) -> str | None:
        if self.date is None:
            return None
        return self.date.strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> datetime | None:
    """Parse a 14-digit capture timestamp; failures yield ``None``."""

    # strptime accepts variable-width fields, so the width is checked first.
    if len(value) != TIMESTAMP_LENGTH or not (value.isascii() and value.isdigit()):
        return None
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def parse_line(line: str) -> ArchiveRecord | None:
    """Turn ``"<url> <length> <timestamp>"`` into a record, or ``None`` to skip."""

    fields = line.split()
    if len(fields) < 3:
        return None
    return ArchiveRecord.from_fields(fields[0], fields[1], fields[2])


def compile_filter(pattern: str | None, logger: structlog.BoundLogger | None = None) -> re.Pattern[str] | None:
    """Compile the URL regex; an invalid pattern disables filtering."""

    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        (logger or structlog.get_logger("wayback_harvest.parser")).info(
            "regex_filter_disabled", pattern=pattern, error=str(exc)
        )
        return None


class RecordParser:
    """Parse lines and apply the per-record filters (regex and date window)."""

    def __init__(self, config: RunConfig, logger: structlog.BoundLogger | None = None) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("wayback_harvest.parser")
        self.pattern = compile_filter(config.regex_filter, self.logger)
        self.start: date | None = config.start_date
        self.end: date | None = config.end_date

    def parse(self, line: str) -> ArchiveRecord | None:
        if not line.strip():
            return None
        record = parse_line(line)
        if record is None:
            self.logger.debug("line_skipped", reason="too_few_fields", line=line[:200])
            return None
        if not self.matches_filter(record.url):
            return None
        if not self.within_window(record):
            return None
        return record

    def matches_filter(self, url: str) -> bool:
        if self.pattern is None:
            return True
        return self.pattern.search(url) is not None

    def within_window(self, record: ArchiveRecord) -> bool:
        if self.start is None and self.end is None:
            return True
        if record.date is None:
            return False
        captured = record.date.date()
        if self.start is not None and captured < self.start:
            return False
        if self.end is not None and captured > self.end:
            return False
        return True


__all__ = [
    "ArchiveRecord",
    "BROWSABLE_PREFIX",
    "RecordParser",
    "compile_filter",
    "parse_line",
    "parse_timestamp",
]
