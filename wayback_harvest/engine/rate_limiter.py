"""Process-wide request pacing shared by every fetch worker."""

from __future__ import annotations

import time
from threading import Lock
from typing import Callable


class RateLimiterStopped(RuntimeError):
    """Raised when ``wait`` is called after ``stop``."""


class RateLimiter:
    """Admit at most ``rate`` operations per second across all threads.

    Behaves like a ticker firing every ``1 / rate`` seconds: ``wait`` blocks
    until the next tick and each tick admits exactly one caller. A tick that
    fires while nobody is waiting is kept (only one), so an idle limiter admits
    the next caller immediately.
    """

    def __init__(
        self,
        rate: int = 10,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate < 1:
            raise ValueError("rate must be >= 1")
        self.rate = rate
        self.interval = 1.0 / rate
        self._clock = clock
        self._sleep = sleep
        self._lock = Lock()
        self._origin = clock()
        self._next_tick = self._origin + self.interval
        self._stopped = False

    def wait(self) -> None:
        # Holding the lock while sleeping is what serialises admission.
        with self._lock:
            if self._stopped:
                raise RateLimiterStopped("rate limiter has been stopped")
            now = self._clock()
            if now < self._next_tick:
                self._sleep(self._next_tick - now)
                self._next_tick += self.interval
                return
            # Buffered tick: admit now and resume on the tick grid.
            elapsed_ticks = int((now - self._origin) / self.interval)
            self._next_tick = self._origin + (elapsed_ticks + 1) * self.interval

    def stop(self) -> None:
        with self._lock:
            self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped

    def __enter__(self) -> "RateLimiter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


__all__ = ["RateLimiter", "RateLimiterStopped"]
