"""Per-domain fetch → parse → aggregate pipeline."""

from __future__ import annotations

from concurrent.futures import Future, wait
from queue import Queue

import structlog

from ..config import RunConfig
from .aggregator import CLOSED, ResultAggregator, RunResult
from .fetcher import Fetcher
from .parser import RecordParser
from .thread_pool import GatedThreadPool


class FetchPipeline:
    """Retrieve one domain's index and build its ordered result set.

    Lines are fanned out to the worker pool; each worker puts at most one
    ``(index, record)`` pair on the aggregator's queue. The queue is closed only
    after every worker future has completed.
    """

    def __init__(
        self,
        config: RunConfig,
        fetcher: Fetcher,
        pool: GatedThreadPool,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher
        self.pool = pool
        self.logger = logger or structlog.get_logger("wayback_harvest.pipeline")
        self.parser = RecordParser(config, logger=self.logger)

    def run(self, domain: str) -> RunResult:
        response = self.fetcher.fetch(domain)
        result = self.process_body(domain, response.text)
        self.logger.debug("domain_processed", domain=domain, results=result.count)
        return result

    def process_body(self, domain: str, body: str) -> RunResult:
        aggregator = ResultAggregator(self.config, domain)
        self._fan_out(body.split("\n"), aggregator.channel)
        return aggregator.collect()

    def _fan_out(self, lines: list[str], channel: Queue) -> None:
        futures: list[Future] = []
        try:
            for index, line in enumerate(lines):
                futures.append(self.pool.submit(self._process_line, index, line, channel))
            wait(futures)
            for future in futures:
                future.result()
        finally:
            channel.put(CLOSED)

    def _process_line(self, index: int, line: str, channel: Queue) -> None:
        record = self.parser.parse(line)
        if record is not None:
            channel.put((index, record))


__all__ = ["FetchPipeline"]
