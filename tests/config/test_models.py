from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from wayback_harvest.config import CsvLayout, OutputFormat, OutputMode, RunConfig


def test_run_config_defaults() -> None:
    config = RunConfig()
    assert config.mode is OutputMode.RAW
    assert config.output_format is OutputFormat.TEXT
    assert config.csv_layout is CsvLayout.DATED
    assert config.concurrent == 10
    assert config.timeout == 30
    assert config.rate_limit == 10
    assert config.max_results == 0
    assert not config.has_date_filter


def test_run_config_is_immutable() -> None:
    config = RunConfig()
    with pytest.raises(ValidationError):
        config.concurrent = 3  # type: ignore[misc]


def test_run_config_rejects_invalid_values() -> None:
    with pytest.raises(ValidationError):
        RunConfig(concurrent=0)
    with pytest.raises(ValidationError):
        RunConfig(rate_limit=0)
    with pytest.raises(ValidationError):
        RunConfig(max_results=-1)
    with pytest.raises(ValidationError):
        RunConfig(output_format="yaml")
    with pytest.raises(ValidationError):
        RunConfig(start_date="2024/01/01")


def test_run_config_date_range_validation() -> None:
    config = RunConfig(start_date="2020-01-01", end_date="2020-12-31")
    assert config.start_date == date(2020, 1, 1)
    assert config.has_date_filter
    with pytest.raises(ValidationError):
        RunConfig(start_date="2021-01-01", end_date="2020-01-01")


def test_run_config_accepts_mixed_case_format_and_blank_filter() -> None:
    config = RunConfig(output_format="JSON", regex_filter="  ")
    assert config.output_format is OutputFormat.JSON
    assert config.regex_filter is None


def test_invalid_regex_is_not_a_config_error() -> None:
    config = RunConfig(regex_filter="[unclosed")
    assert config.regex_filter == "[unclosed"


def test_output_mode_from_flags() -> None:
    assert OutputMode.from_flags() is OutputMode.RAW
    assert OutputMode.from_flags(browsable=True) is OutputMode.BROWSABLE
    assert OutputMode.from_flags(subdomain=True) is OutputMode.SUBDOMAIN
    assert OutputMode.from_flags(tabular=True) is OutputMode.TABULAR
    with pytest.raises(ValueError, match="browsable, subdomain"):
        OutputMode.from_flags(browsable=True, subdomain=True)


def test_tabular_mode_turns_text_into_csv() -> None:
    assert RunConfig(mode="tabular").effective_format is OutputFormat.CSV
    assert RunConfig(mode="tabular", output_format="json").effective_format is OutputFormat.JSON
    assert RunConfig(mode="browsable").effective_format is OutputFormat.TEXT
