"""Line-oriented text output: URLs, browsable links or subdomains."""

from __future__ import annotations

from ...config import OutputMode
from ..aggregator import RunResult
from .base import BaseRenderer


class TextRenderer(BaseRenderer):
    """One value per line."""

    def values(self, result: RunResult) -> list[str]:
        if result.mode is OutputMode.SUBDOMAIN:
            return list(result.hosts)
        if result.mode is OutputMode.BROWSABLE:
            return [record.browsable_url for record in result.records]
        return [record.url for record in result.records]

    def serialise(self, result: RunResult) -> str:
        return "".join(f"{value}\n" for value in self.values(result))


__all__ = ["TextRenderer"]
