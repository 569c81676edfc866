"""Bounded worker pool used for per-line record construction."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from threading import BoundedSemaphore
from typing import Any, Callable


class GatedThreadPool:
    """Thread pool whose in-flight task count is capped by a semaphore.

    ``submit`` blocks the caller once ``max_workers`` tasks are pending, so a
    very large response never queues more work than the pool can run.
    """

    def __init__(self, max_workers: int = 10, name: str = "lines") -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=f"wayback-{name}")
        self._gate = BoundedSemaphore(max_workers)

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        self._gate.acquire()
        try:
            future = self._executor.submit(fn, *args)
        except BaseException:
            self._gate.release()
            raise
        future.add_done_callback(lambda _future: self._gate.release())
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "GatedThreadPool":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


__all__ = ["GatedThreadPool"]
