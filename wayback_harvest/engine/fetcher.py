"""HTTP fetching against the archive CDX index."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

import httpx
import structlog

from ..config import RunConfig
from .rate_limiter import RateLimiter

CDX_FIELDS = "original,length,timestamp"
_SCHEMES = ("http://", "https://")


class FetchError(RuntimeError):
    """Retrieving one domain's index failed; other domains are unaffected."""

    def __init__(self, domain: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"{domain}: {reason}")
        self.domain = domain
        self.reason = reason
        self.status_code = status_code


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    domain: str
    status_code: int
    text: str


def normalise_target(domain: str) -> str:
    """Drop surrounding whitespace, a leading scheme and trailing slashes."""

    target = domain.strip()
    for scheme in _SCHEMES:
        if target.startswith(scheme):
            target = target[len(scheme):]
            break
    return target.rstrip("/")


def build_query_url(domain: str, endpoint: str) -> str:
    """Return the CDX query matching every capture under ``*.<domain>/*``."""

    pattern = f"*.{normalise_target(domain)}/*"
    return f"{endpoint}?url={quote(pattern, safe='')}&fl={CDX_FIELDS}"


class Fetcher:
    """Issue one rate-limited, timeout-bounded index request per domain."""

    def __init__(
        self,
        config: RunConfig,
        rate_limiter: RateLimiter,
        logger: structlog.BoundLogger | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.rate_limiter = rate_limiter
        self.logger = logger or structlog.get_logger("wayback_harvest.fetcher")
        headers = {"User-Agent": config.user_agent} if config.user_agent else None
        self._client = httpx.Client(
            follow_redirects=True,
            timeout=config.timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, domain: str) -> FetchResponse:
        if not normalise_target(domain):
            raise FetchError(domain, "empty target domain")
        url = build_query_url(domain, self.config.cdx_endpoint)
        self.logger.debug("fetch_start", domain=domain, url=url)

        self.rate_limiter.wait()

        try:
            response = self._client.get(url)
        except httpx.TimeoutException as exc:
            raise FetchError(domain, f"request timed out after {self.config.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise FetchError(domain, f"failed to fetch data: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise FetchError(
                domain, f"HTTP error: {response.status_code}", status_code=response.status_code
            )

        self.logger.debug(
            "fetch_complete", domain=domain, status=response.status_code, bytes=len(response.content)
        )
        return FetchResponse(
            domain=domain,
            status_code=response.status_code,
            text=response.text,
        )


__all__ = ["CDX_FIELDS", "FetchError", "FetchResponse", "Fetcher", "build_query_url", "normalise_target"]
