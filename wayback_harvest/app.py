"""Typer CLI entrypoint for Wayback Harvest."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import Any, BinaryIO, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .config import ConfigLocator, ConfigRepository, OutputMode, RunConfig, load_targets
from .engine import FetchError
from .engine.renderer import RenderError
from .logging_conf import configure_logging
from .orchestrator import Orchestrator, RunSummary
from .ui import DomainProgress

app = typer.Typer(
    help="Fetch every archived URL of a domain from the Wayback Machine index.",
    add_completion=False,
    rich_markup_mode=None,
)

console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"wayback-harvest {__version__}")
        raise typer.Exit()


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "config"
        parts.append(f"{location}: {error.get('msg')}")
    return "; ".join(parts)


def _input_error(message: str) -> typer.Exit:
    console.print(f"Error: {message}", style="red")
    return typer.Exit(code=2)


def build_config(config_file: Path | None, overrides: dict[str, Any]) -> RunConfig:
    repository = ConfigRepository(ConfigLocator(explicit_path=config_file))
    return repository.build(overrides)


def _resolve_targets(domain: str | None, input_file: Path | None) -> list[str]:
    if input_file is not None:
        try:
            targets = load_targets(input_file)
        except OSError as exc:
            raise _input_error(f"cannot read input file {input_file}: {exc}") from exc
        if not targets:
            raise _input_error(f"input file {input_file} contains no domains")
        return targets
    if domain and domain.strip():
        return [domain.strip()]
    raise _input_error("a target domain or --input-file is required")


def _render_summary(summary: RunSummary, total: int) -> None:
    if not summary.ok:
        console.print(
            f"{len(summary.failed)} of {total} domains failed: " + ", ".join(summary.failed),
            style="yellow",
        )


@app.command()
def main(
    domain: Optional[str] = typer.Argument(None, help="Target domain, e.g. example.com."),
    wayback_only: bool = typer.Option(False, "--wayback-only", help="Output only archived URLs (default mode)."),
    browsable: bool = typer.Option(False, "--browsable", help="Output Wayback Machine browsable links."),
    subdomain: bool = typer.Option(False, "--subdomain", help="Output unique subdomains, sorted."),
    save_csv: bool = typer.Option(False, "--save-wayback-csv", help="Output tabular records (CSV unless --format is set)."),
    unique_urls: bool = typer.Option(False, "--unique-urls", help="Remove duplicate URLs."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Emit diagnostic logs on stderr."),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write results to this file instead of stdout."),
    concurrent: Optional[int] = typer.Option(None, "--concurrent", help="Number of concurrent line workers [default: 10]."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds [default: 30]."),
    start_date: Optional[str] = typer.Option(None, "--start-date", help="Keep captures on or after this date (YYYY-MM-DD)."),
    end_date: Optional[str] = typer.Option(None, "--end-date", help="Keep captures on or before this date (YYYY-MM-DD)."),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        help=(
            "Output format: text, json, xml or csv [default: text]. With --input-file "
            "each domain is written as its own JSON or XML document, one after another."
        ),
    ),
    input_file: Optional[Path] = typer.Option(None, "--input-file", help="File with one domain per line."),
    regex_filter: Optional[str] = typer.Option(None, "--filter", help="Regex a URL must match to be kept."),
    rate_limit: Optional[int] = typer.Option(None, "--rate-limit", help="Maximum requests per second [default: 10]."),
    max_results: Optional[int] = typer.Option(None, "--max-results", help="Maximum results per domain, 0 for unlimited."),
    csv_legacy: bool = typer.Option(False, "--csv-legacy", help="Write CSV without the DATE column."),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML or JSON file with default options."),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write JSON logs to this file."),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """Query the archive index for DOMAIN (or every domain in --input-file)."""

    try:
        mode = OutputMode.from_flags(wayback_only, browsable, subdomain, save_csv)
    except ValueError as exc:
        raise _input_error(str(exc)) from exc

    overrides: dict[str, Any] = {
        "concurrent": concurrent,
        "timeout": timeout,
        "rate_limit": rate_limit,
        "start_date": start_date,
        "end_date": end_date,
        "output_format": output_format,
        "regex_filter": regex_filter,
        "max_results": max_results,
    }
    if wayback_only or browsable or subdomain or save_csv:
        overrides["mode"] = mode
    for key, flag in (("unique_urls", unique_urls), ("verbose", verbose)):
        if flag:
            overrides[key] = True
    if csv_legacy:
        overrides["csv_layout"] = "legacy"

    try:
        config = build_config(config_file, overrides)
    except ValidationError as exc:
        raise _input_error(_format_validation_error(exc)) from exc
    except (OSError, ValueError) as exc:
        raise _input_error(str(exc)) from exc

    targets = _resolve_targets(domain, input_file)
    logger = configure_logging(verbose=config.verbose, log_file=log_file)
    logger.debug("run_config", targets=len(targets), **config.model_dump(mode="json"))

    single = input_file is None
    with ExitStack() as stack:
        if output is not None:
            try:
                sink: BinaryIO = stack.enter_context(output.open("wb"))
            except OSError as exc:
                console.print(f"Error: cannot create output file {output}: {exc}", style="red")
                raise typer.Exit(code=1) from exc
        else:
            sink = typer.get_binary_stream("stdout")
        orchestrator = stack.enter_context(Orchestrator(config))
        progress = None if single else DomainProgress(enabled=not config.verbose, console=console)
        try:
            summary = orchestrator.run(targets, sink, fail_fast=single, progress=progress)
        except FetchError as exc:
            console.print(f"Error processing {exc.domain}: {exc.reason}", style="red")
            raise typer.Exit(code=1) from exc
        except RenderError as exc:
            console.print(f"Error writing output for {exc.domain}: {exc.reason}", style="red")
            raise typer.Exit(code=1) from exc

    _render_summary(summary, len(targets))
    logger.debug(
        "run_complete",
        succeeded=len(summary.succeeded),
        failed=len(summary.failed),
        results=summary.results_written,
    )


def run() -> None:
    app()


__all__ = ["app", "build_config", "main", "run"]
