"""Configuration package exports."""

from .loader import CONFIG_ENV_VAR, ConfigLocator, ConfigRepository, load_targets
from .models import (
    DEFAULT_CDX_ENDPOINT,
    CsvLayout,
    OutputFormat,
    OutputMode,
    RunConfig,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigLocator",
    "ConfigRepository",
    "CsvLayout",
    "DEFAULT_CDX_ENDPOINT",
    "OutputFormat",
    "OutputMode",
    "RunConfig",
    "load_targets",
]
