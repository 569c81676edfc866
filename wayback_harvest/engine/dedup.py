"""Per-domain URL deduplication."""

from __future__ import annotations

from typing import Iterable, Iterator

from .parser import ArchiveRecord


class UrlDeduplicator:
    """Remember URLs already emitted for one domain's result set."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def check_and_store(self, url: str) -> bool:
        """Return ``True`` when ``url`` was already seen; store it otherwise."""

        if url in self._seen:
            return True
        self._seen.add(url)
        return False

    def filter(self, records: Iterable[ArchiveRecord]) -> Iterator[ArchiveRecord]:
        """Yield the first record for every URL, preserving order."""

        for record in records:
            if not self.check_and_store(record.url):
                yield record


__all__ = ["UrlDeduplicator"]
