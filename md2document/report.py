"""per-file conversion report for batch runs."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn
from rich.table import Table

from md2document.core.models import Document
from md2document.exporters.base import ExportResult, ExportStatus


@dataclass(frozen=True)
class FileOutcome:
    """what a single markdown file produced."""

    source: str
    headings: int = 0
    links: int = 0
    result: Optional[ExportResult] = None
    error: str = ""

    @property
    def failed(self) -> bool:
        return self.result is None


class ConversionReport:
    """collects per-file outcomes and prints them on stderr."""

    def __init__(self, quiet: bool = False, show_progress: bool = False) -> None:
        self.quiet = quiet
        self.show_progress = show_progress
        self.outcomes: list[FileOutcome] = []
        self._console = Console(stderr=True)
        self._progress: Optional[Progress] = None
        self._task_id: Optional[TaskID] = None

    def __enter__(self) -> "ConversionReport":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self._stop()

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None

    @property
    def converted(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.failed)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.failed)

    def start(self, total: int) -> None:
        """starts the progress bar over the discovered files."""
        if not self.show_progress:
            return

        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("- {task.fields[name]}"),
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("Converting", total=total, name="")

    def _advance(self, name: str) -> None:
        if self._progress is None or self._task_id is None:
            return

        self._progress.update(self._task_id, advance=1, name=name)

    def record(self, source: Path, document: Document, result: ExportResult) -> None:
        """records a converted file with its outline and link counts."""
        self.outcomes.append(
            FileOutcome(
                source=source.name,
                headings=len(document.headings),
                links=len(document.links),
                result=result,
            )
        )
        self._advance(source.name)

    def record_failure(self, source: Path, error: Exception) -> None:
        """records a file that could not be converted (always printed)."""
        self.outcomes.append(FileOutcome(source=source.name, error=str(error)))
        self._console.print(f"[red]ERROR:[/red] {source.name}: {error}")
        self._advance(source.name)

    def finish(self) -> None:
        """stops progress and prints the per-file table and totals unless quiet."""
        self._stop()

        if self.quiet:
            return

        if not self.outcomes:
            self._console.print("No markdown files found")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("File")
        table.add_column("Headings", justify="right")
        table.add_column("Links", justify="right")
        table.add_column("Output")
        for outcome in self.outcomes:
            if outcome.result is None:
                table.add_row(outcome.source, "-", "-", "[red]failed[/red]")
                continue
            table.add_row(
                outcome.source,
                str(outcome.headings),
                str(outcome.links),
                f"{outcome.result.path} ({outcome.result.status.value})",
            )
        self._console.print(table)
        self._console.print(self.summary())

    def summary(self) -> str:
        """one-line totals by export status."""
        counts = {status: 0 for status in ExportStatus}
        for outcome in self.outcomes:
            if outcome.result is not None:
                counts[outcome.result.status] += 1

        parts = [
            f"{counts[status]} {status.value}"
            for status in ExportStatus
            if counts[status]
        ]
        parts.append(f"{self.failed} failed")
        return f"Processed {len(self.outcomes)} document(s): " + ", ".join(parts)
