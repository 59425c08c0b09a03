"""base exporter interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from md2document.core.models import Document


class ExportStatus(Enum):
    """what happened to an export target."""

    WRITTEN = "written"
    DRY_RUN = "would write"
    SKIPPED = "kept existing"


@dataclass(frozen=True)
class ExportResult:
    """output path of an export and whether it was written."""

    path: Path
    status: ExportStatus


class Exporter(ABC):
    """abstract base class for document exporters."""

    suffix: str = ""

    def export(
        self,
        document: Document,
        name: str,
        destination: str,
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> ExportResult:
        """
        writes a document to <destination>/<name><suffix>.

        Args:
            document: the converted document
            name: output file name without suffix
            destination: output directory
            dry_run: if True, don't write anything
            overwrite: if True, replace an existing file

        Returns:
            the (would-be) output path and what was done with it
        """
        output_path = Path(destination) / f"{name}{self.suffix}"

        if dry_run:
            return ExportResult(output_path, ExportStatus.DRY_RUN)

        if output_path.exists() and not overwrite:
            return ExportResult(output_path, ExportStatus.SKIPPED)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(document, name), encoding="utf-8")
        return ExportResult(output_path, ExportStatus.WRITTEN)

    @abstractmethod
    def render(self, document: Document, name: str) -> str:
        """renders the document to the exporter's file format."""
        ...  # pylint: disable=unnecessary-ellipsis
