"""Fan-in stage turning a domain's parsed records into its final result set."""

from __future__ import annotations

from dataclasses import dataclass, field
from queue import Queue
from typing import Iterable, Iterator

from ..config import OutputMode, RunConfig
from .dedup import UrlDeduplicator
from .parser import ArchiveRecord
from .subdomains import collect_subdomains

CLOSED = object()


@dataclass(frozen=True, slots=True)
class RunResult:
    """Final ordered output for one domain."""

    domain: str
    records: tuple[ArchiveRecord, ...] = ()
    hosts: tuple[str, ...] = ()
    mode: OutputMode = OutputMode.RAW

    @property
    def count(self) -> int:
        if self.mode is OutputMode.SUBDOMAIN:
            return len(self.hosts)
        return len(self.records)


@dataclass
class ResultAggregator:
    """Drain the results queue, restore upstream order, dedup and cap.

    Workers put ``(line_index, record)`` pairs on ``channel`` and the pipeline
    puts ``CLOSED`` once every worker has finished.
    """

    config: RunConfig
    domain: str
    channel: Queue = field(default_factory=Queue)

    def drain(self) -> Iterator[tuple[int, ArchiveRecord]]:
        while True:
            item = self.channel.get()
            if item is CLOSED:
                return
            yield item

    def collect(self) -> RunResult:
        ordered = [record for _, record in sorted(self.drain(), key=lambda item: item[0])]
        return self.finalise(ordered)

    def finalise(self, records: list[ArchiveRecord]) -> RunResult:
        limit = self.config.max_results
        if self.config.mode is OutputMode.SUBDOMAIN:
            hosts = collect_subdomains(record.url for record in records)
            if limit:
                hosts = hosts[:limit]
            return RunResult(domain=self.domain, hosts=tuple(hosts), mode=self.config.mode)

        candidates: Iterable[ArchiveRecord] = records
        if self.config.unique_urls:
            candidates = UrlDeduplicator().filter(records)
        accepted: list[ArchiveRecord] = []
        for record in candidates:
            accepted.append(record)
            if limit and len(accepted) >= limit:
                break
        return RunResult(domain=self.domain, records=tuple(accepted), mode=self.config.mode)


__all__ = ["CLOSED", "ResultAggregator", "RunResult"]
