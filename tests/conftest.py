"""Shared fixtures: run configs, canned CDX bodies and a mock upstream."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator

import httpx
import pytest
import structlog

from wayback_harvest.config import RunConfig
from wayback_harvest.engine import RateLimiter
from wayback_harvest.logging_conf import LOGGER_NAME

CDX_BODY = "\n".join(
    [
        "http://example.com/ 1043 20190101120000",
        "http://www.example.com/about 2210 20200315083000",
        "https://blog.example.com/post?id=1 5120 20210704000000",
        "http://example.com/ 1043 20220101120000",
        "http://Shop.Example.com:8080/cart 777 20230101120000",
        "",
    ]
)


@pytest.fixture
def make_config() -> Callable[..., RunConfig]:
    def _builder(**overrides: Any) -> RunConfig:
        base: dict[str, Any] = {"concurrent": 4, "timeout": 5, "rate_limit": 1000}
        base.update(overrides)
        return RunConfig(**base)

    return _builder


@pytest.fixture
def cdx_body() -> str:
    return CDX_BODY


@pytest.fixture
def fast_limiter() -> Iterator[RateLimiter]:
    limiter = RateLimiter(1000)
    yield limiter
    limiter.stop()


class RecordingTransport(httpx.MockTransport):
    """Mock upstream answering per target domain and remembering requests."""

    def __init__(self, bodies: dict[str, str | int]) -> None:
        self.bodies = bodies
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        pattern = request.url.params.get("url", "")
        domain = pattern.removeprefix("*.").removesuffix("/*")
        body = self.bodies.get(domain, "")
        if isinstance(body, int):
            return httpx.Response(body, text="upstream failure")
        return httpx.Response(200, text=body)


@pytest.fixture
def upstream() -> Callable[[dict[str, str | int]], RecordingTransport]:
    return RecordingTransport


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger(LOGGER_NAME).handlers.clear()
