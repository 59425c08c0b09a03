"""tests for the conversion report."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from md2document.core.models import Document, Heading, Link, LocalUrl
from md2document.exporters.base import ExportResult, ExportStatus
from md2document.report import ConversionReport


def _document() -> Document:
    return Document(
        html="",
        headings=(Heading("A", "a-1", 1), Heading("B", "b-2", 2)),
        links=(Link("x", LocalUrl("/x")),),
    )


def _written(name: str) -> ExportResult:
    return ExportResult(Path("out") / name, ExportStatus.WRITTEN)


def test_record_counts_headings_and_links() -> None:
    """each converted file keeps its outline and link counts."""
    report = ConversionReport(quiet=True)

    report.record(Path("guide.md"), _document(), _written("guide.html"))

    outcome = report.outcomes[0]
    assert outcome.source == "guide.md"
    assert outcome.headings == 2
    assert outcome.links == 1
    assert outcome.result == _written("guide.html")
    assert report.converted == 1
    assert report.failed == 0


def test_record_failure_always_prints() -> None:
    """failures are printed even in quiet mode and counted."""
    report = ConversionReport(quiet=True)
    with patch.object(report, "_console") as mock_console:
        report.record_failure(Path("bad.md"), OSError("permission denied"))

    message = mock_console.print.call_args[0][0]
    assert "bad.md" in message
    assert report.failed == 1
    assert report.outcomes[0].failed


def test_start_does_nothing_when_progress_disabled() -> None:
    """no progress bar unless requested."""
    with patch("md2document.report.Progress") as mock_progress_class:
        report = ConversionReport(show_progress=False)
        report.start(3)

        mock_progress_class.assert_not_called()


def test_record_advances_progress() -> None:
    """each recorded file advances the bar and shows its name."""
    with patch("md2document.report.Progress") as mock_progress_class:
        mock_progress = MagicMock()
        mock_progress_class.return_value = mock_progress
        mock_progress.add_task.return_value = 0

        with ConversionReport(quiet=True, show_progress=True) as report:
            report.start(2)
            report.record(Path("a.md"), _document(), _written("a.html"))
            report.record_failure(Path("b.md"), OSError("denied"))

        mock_progress.add_task.assert_called_once_with("Converting", total=2, name="")
        mock_progress.update.assert_called_with(0, advance=1, name="b.md")
        assert mock_progress.update.call_count == 2
        mock_progress.stop.assert_called_once()


def test_finish_quiet_prints_nothing() -> None:
    """quiet mode suppresses the table and totals."""
    report = ConversionReport(quiet=True)
    report.record(Path("a.md"), _document(), _written("a.html"))
    with patch.object(report, "_console") as mock_console:
        report.finish()

    mock_console.print.assert_not_called()


def test_finish_prints_table_and_summary() -> None:
    """finish prints the per-file table followed by the totals."""
    report = ConversionReport()
    report.record(Path("a.md"), _document(), _written("a.html"))
    with patch.object(report, "_console") as mock_console:
        report.finish()

    assert mock_console.print.call_count == 2
    assert mock_console.print.call_args[0][0] == report.summary()


def test_finish_without_files() -> None:
    """an empty run says nothing was found."""
    report = ConversionReport()
    with patch.object(report, "_console") as mock_console:
        report.finish()

    assert "No markdown files found" in mock_console.print.call_args[0][0]


def test_summary_counts_export_statuses() -> None:
    """totals separate written, skipped and dry-run exports from failures."""
    report = ConversionReport(quiet=True)
    report.record(Path("a.md"), _document(), _written("a.html"))
    report.record(
        Path("b.md"), _document(), ExportResult(Path("b.html"), ExportStatus.SKIPPED)
    )
    report.record(
        Path("c.md"), _document(), ExportResult(Path("c.html"), ExportStatus.DRY_RUN)
    )
    report.record_failure(Path("d.md"), OSError("denied"))

    assert report.summary() == (
        "Processed 4 document(s): 1 written, 1 would write, 1 kept existing, 1 failed"
    )
