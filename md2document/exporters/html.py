"""standalone HTML page exporter."""

import html as html_lib

from md2document.core.models import Document
from md2document.exporters.base import Exporter


class HTMLExporter(Exporter):  # pylint: disable=too-few-public-methods
    """exports documents as standalone HTML pages."""

    suffix = ".html"

    def render(self, document: Document, name: str) -> str:
        """wraps the document body in a page titled after its first heading."""
        title = document.headings[0].title if document.headings else name
        title_escaped = html_lib.escape(title.strip() or name)

        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title_escaped}</title>
</head>
<body>
{document.html}</body>
</html>
"""
