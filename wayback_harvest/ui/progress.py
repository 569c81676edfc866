"""Rich progress bar tracking domains in an input-file run."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class DomainProgress:
    """Render per-domain progress on stderr; a no-op when disabled."""

    def __init__(self, enabled: bool = True, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self.enabled = enabled and self.console.is_terminal
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def start(self, total: int) -> None:
        if not self.enabled or self._progress is not None:
            return
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold cyan]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("domains", total=total)

    def advance(self, domain: str) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(self._task_id, advance=1, description=domain)

    def stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task_id = None

    def __enter__(self) -> "DomainProgress":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


__all__ = ["DomainProgress"]
