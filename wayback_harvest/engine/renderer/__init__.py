"""Renderers for every output format."""

from __future__ import annotations

from ...config import OutputFormat, OutputMode, RunConfig
from .base import BaseRenderer, RenderError
from .structured import JsonRenderer, XmlRenderer
from .tabular import CsvRenderer
from .text import TextRenderer

_RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.TEXT: TextRenderer,
    OutputFormat.CSV: CsvRenderer,
    OutputFormat.JSON: JsonRenderer,
    OutputFormat.XML: XmlRenderer,
}


def build_renderer(config: RunConfig) -> BaseRenderer:
    """Pick the renderer for the run; subdomain mode always renders text."""

    if config.mode is OutputMode.SUBDOMAIN:
        return TextRenderer(config)
    return _RENDERERS[config.effective_format](config)


__all__ = [
    "BaseRenderer",
    "CsvRenderer",
    "JsonRenderer",
    "RenderError",
    "TextRenderer",
    "XmlRenderer",
    "build_renderer",
]
