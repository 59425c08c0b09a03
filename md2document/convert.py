"""Batch conversion of markdown files."""

import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Optional

from md2document.core.models import ParseOptions
from md2document.core.parser import parse
from md2document.exporters.base import Exporter
from md2document.exporters.html import HTMLExporter
from md2document.exporters.json import JSONExporter
from md2document.report import ConversionReport

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")

EXPORTERS: dict[str, type[Exporter]] = {
    "html": HTMLExporter,
    "json": JSONExporter,
}


def discover_files(source: Path, extract_dir: Optional[Path] = None) -> list[Path]:
    """
    discovers markdown files from source path.

    Args:
        source: path to a markdown file, directory, or ZIP archive
        extract_dir: directory ZIP members are extracted into; required for
            archives and owned by the caller

    Returns:
        sorted list of paths to markdown files

    Raises:
        FileNotFoundError: if source doesn't exist
        ValueError: if source is a ZIP archive and no extract_dir is given
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        if source.suffix == ".zip":
            if extract_dir is None:
                raise ValueError(f"No extraction directory for archive: {source}")
            return _extract_zip(source, extract_dir)
        if source.suffix in MARKDOWN_SUFFIXES:
            return [source]
        return []

    if source.is_dir():
        return sorted(p for p in source.iterdir() if p.suffix in MARKDOWN_SUFFIXES)

    return []


def _extract_zip(zip_path: Path, extract_dir: Path) -> list[Path]:
    """extracts markdown files from ZIP archive into extract_dir."""
    with zipfile.ZipFile(zip_path, "r") as zf:
        for name in sorted(zf.namelist()):
            if name.endswith(MARKDOWN_SUFFIXES):
                # extracts by base name only, preventing path traversal
                target_path = _unique_path(extract_dir / Path(name).name)
                if target_path.name != Path(name).name:
                    logger.warning(
                        "Duplicate file name in %s: %s extracted as %s",
                        zip_path.name,
                        name,
                        target_path.name,
                    )
                target_path.write_bytes(zf.read(name))

    return sorted(p for p in extract_dir.iterdir() if p.suffix in MARKDOWN_SUFFIXES)


def _unique_path(path: Path) -> Path:
    """returns path, or the first free <stem>-N<suffix> beside it."""
    candidate = path
    counter = 2
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}-{counter}{path.suffix}")
        counter += 1
    return candidate


def convert_files(
    source: Path,
    destination: str,
    options: Optional[ParseOptions] = None,
    output_format: str = "html",
    dry_run: bool = False,
    overwrite: bool = False,
    quiet: bool = False,
    progress: bool = False,
) -> int:
    """
    converts every markdown file under source and exports the results.

    Args:
        source: path to markdown file, directory, or ZIP archive
        destination: output directory
        options: parse options shared by all files
        output_format: exporter name ("html" or "json")
        dry_run: if True, don't write any files
        overwrite: if True, replace existing output files
        quiet: if True, suppress non-error output
        progress: if True, show progress bar

    Returns:
        exit code (0 success, 1 partial failure)
    """
    exporter = EXPORTERS[output_format]()

    with tempfile.TemporaryDirectory(prefix="md2document_") as work_dir:
        files = discover_files(source, Path(work_dir))

        with ConversionReport(quiet=quiet, show_progress=progress) as report:
            report.start(len(files))
            for file_path in files:
                _convert_file(
                    file_path, exporter, destination, options, dry_run, overwrite, report
                )
            report.finish()

    if report.failed > 0:
        return 1
    return 0


def _convert_file(
    file_path: Path,
    exporter: Exporter,
    destination: str,
    options: Optional[ParseOptions],
    dry_run: bool,
    overwrite: bool,
    report: ConversionReport,
) -> None:
    """converts and exports a single markdown file, recording the outcome."""
    try:
        text = file_path.read_text(encoding="utf-8")
        document = parse(text, options)
        result = exporter.export(
            document,
            name=file_path.stem,
            destination=destination,
            dry_run=dry_run,
            overwrite=overwrite,
        )
    except (OSError, UnicodeDecodeError) as e:
        report.record_failure(file_path, e)
        return

    logger.debug("Converted %s -> %s (%s)", file_path, result.path, result.status.value)
    report.record(file_path, document, result)
