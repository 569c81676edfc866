"""Run coordinator wiring rate limiting, fetching, aggregation and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Sequence

import httpx
import structlog

from .config import RunConfig
from .engine import FetchError, FetchPipeline, Fetcher, GatedThreadPool, RateLimiter
from .engine.renderer import BaseRenderer, build_renderer
from .logging_conf import get_logger
from .ui import DomainProgress


@dataclass
class RunSummary:
    """Outcome of a run across all target domains."""

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    results_written: int = 0
    bytes_written: int = 0

    @property
    def ok(self) -> bool:
        return not self.failed


class Orchestrator:
    """Own the per-run resources and process target domains in order.

    A fetch error on one domain is recorded and the run moves on to the next
    domain, unless ``fail_fast`` is set (single-domain runs). Render errors
    always propagate.
    """

    def __init__(
        self,
        config: RunConfig,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.BaseTransport | None = None,
        renderer: BaseRenderer | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or get_logger("orchestrator")
        self.rate_limiter = rate_limiter or RateLimiter(config.rate_limit)
        self.pool = GatedThreadPool(config.concurrent)
        self.fetcher = Fetcher(config, self.rate_limiter, logger=get_logger("fetcher"), transport=transport)
        self.pipeline = FetchPipeline(config, self.fetcher, self.pool, logger=get_logger("pipeline"))
        self.renderer = renderer or build_renderer(config)

    def close(self) -> None:
        self.fetcher.close()
        self.pool.shutdown()
        self.rate_limiter.stop()

    def __enter__(self) -> "Orchestrator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run(
        self,
        domains: Sequence[str],
        sink: BinaryIO,
        fail_fast: bool = False,
        progress: DomainProgress | None = None,
    ) -> RunSummary:
        summary = RunSummary()
        if progress is not None:
            progress.start(len(domains))
        try:
            for domain in domains:
                try:
                    result = self.pipeline.run(domain)
                except FetchError as exc:
                    self.logger.error("domain_failed", domain=domain, error=exc.reason)
                    summary.failed[domain] = exc.reason
                    if progress is not None:
                        progress.advance(domain)
                    if fail_fast:
                        raise
                    continue
                summary.bytes_written += self.renderer.render(result, sink)
                summary.results_written += result.count
                summary.succeeded.append(domain)
                self.logger.info("domain_complete", domain=domain, results=result.count)
                if progress is not None:
                    progress.advance(domain)
        finally:
            if progress is not None:
                progress.stop()
        return summary


__all__ = ["Orchestrator", "RunSummary"]
