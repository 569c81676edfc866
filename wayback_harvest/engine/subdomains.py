"""Host extraction for subdomain mode."""

from __future__ import annotations

from typing import Iterable

_SCHEMES = ("http://", "https://")


def extract_subdomain(url: str) -> str:
    """Return the lower-cased host of ``url`` without scheme, port or path."""

    host = url
    for scheme in _SCHEMES:
        if host.startswith(scheme):
            host = host[len(scheme):]
            break
    host = host.split("/", 1)[0]
    host = host.split(":", 1)[0]
    return host.lower()


def collect_subdomains(urls: Iterable[str]) -> list[str]:
    """Deduplicate the hosts of ``urls`` and return them sorted."""

    hosts = {extract_subdomain(url) for url in urls}
    hosts.discard("")
    return sorted(hosts)


__all__ = ["collect_subdomains", "extract_subdomain"]
