"""JSON exporter for documents and their metadata."""

import json

from md2document.core.models import Document
from md2document.exporters.base import Exporter


class JSONExporter(Exporter):  # pylint: disable=too-few-public-methods
    """exports html, headings and links as a JSON object."""

    suffix = ".json"

    def render(self, document: Document, _name: str) -> str:
        """serializes the document with its headings and links."""
        return json.dumps(document.to_dict(), ensure_ascii=False, indent=2) + "\n"
