"""Renderer Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from ...config import RunConfig
from ..aggregator import RunResult


class RenderError(RuntimeError):
    """Writing rendered output to the sink failed."""

    def __init__(self, domain: str, reason: str) -> None:
        super().__init__(f"{domain}: {reason}")
        self.domain = domain
        self.reason = reason


class BaseRenderer(ABC):
    """Uniform renderer contract: serialise one result set into a byte sink."""

    encoding = "utf-8"

    def __init__(self, config: RunConfig) -> None:
        self.config = config

    @abstractmethod
    def serialise(self, result: RunResult) -> str:
        """Return the complete text for ``result``."""

    def render(self, result: RunResult, sink: BinaryIO) -> int:
        """Write ``result`` into ``sink`` and return the number of bytes written."""

        try:
            payload = self.serialise(result).encode(self.encoding)
            sink.write(payload)
            sink.flush()
        except (OSError, ValueError) as exc:
            raise RenderError(result.domain, f"failed to write output: {exc}") from exc
        return len(payload)


__all__ = ["BaseRenderer", "RenderError"]
