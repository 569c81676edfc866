"""Pydantic models describing a single Wayback Harvest run."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_CDX_ENDPOINT = "https://web.archive.org/cdx/search/cdx"


class OutputMode(str, Enum):
    """Primary output modes; exactly one is active per run."""

    RAW = "raw"
    BROWSABLE = "browsable"
    SUBDOMAIN = "subdomain"
    TABULAR = "tabular"

    @classmethod
    def from_flags(
        cls,
        raw: bool = False,
        browsable: bool = False,
        subdomain: bool = False,
        tabular: bool = False,
    ) -> "OutputMode":
        selected = [
            mode
            for mode, enabled in (
                (cls.RAW, raw),
                (cls.BROWSABLE, browsable),
                (cls.SUBDOMAIN, subdomain),
                (cls.TABULAR, tabular),
            )
            if enabled
        ]
        if len(selected) > 1:
            names = ", ".join(mode.value for mode in selected)
            raise ValueError(f"Only one output mode may be selected, got: {names}")
        return selected[0] if selected else cls.RAW


class OutputFormat(str, Enum):
    """Serialisation formats for rendered results."""

    TEXT = "text"
    JSON = "json"
    XML = "xml"
    CSV = "csv"


class CsvLayout(str, Enum):
    """CSV column layouts: three legacy columns or with the parsed DATE column."""

    LEGACY = "legacy"
    DATED = "dated"


class RunConfig(BaseModel):
    """Immutable snapshot of every run parameter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: OutputMode = OutputMode.RAW
    output_format: OutputFormat = OutputFormat.TEXT
    csv_layout: CsvLayout = CsvLayout.DATED
    concurrent: int = Field(default=10, ge=1)
    timeout: float = Field(default=30.0, gt=0)
    rate_limit: int = Field(default=10, ge=1)
    start_date: date | None = None
    end_date: date | None = None
    regex_filter: str | None = None
    max_results: int = Field(default=0, ge=0)
    unique_urls: bool = False
    verbose: bool = False
    cdx_endpoint: str = DEFAULT_CDX_ENDPOINT
    user_agent: str | None = None

    @field_validator("output_format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("regex_filter", "user_agent", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _validate_dates(self) -> "RunConfig":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be earlier than start_date")
        return self

    @property
    def effective_format(self) -> OutputFormat:
        """Tabular mode turns the plain text format into CSV records."""

        if self.mode is OutputMode.TABULAR and self.output_format is OutputFormat.TEXT:
            return OutputFormat.CSV
        return self.output_format

    @property
    def has_date_filter(self) -> bool:
        return self.start_date is not None or self.end_date is not None


__all__ = [
    "CsvLayout",
    "DEFAULT_CDX_ENDPOINT",
    "OutputFormat",
    "OutputMode",
    "RunConfig",
]
