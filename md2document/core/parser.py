"""Markdown to Document conversion."""

from collections.abc import Iterable
from typing import Any, Optional, cast

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from md2document.core.models import Document, Heading, Link, ParseOptions
from md2document.core.sanitize import sanitize_html
from md2document.core.transformer import StreamTransformer


def create_markdown() -> MarkdownIt:
    """
    creates the CommonMark parser with the extensions documents rely on.

    Returns:
        MarkdownIt instance with strikethrough, tables and task lists
    """
    # store_labels marks reference-style links so they can be told apart
    md = MarkdownIt("commonmark", {"store_labels": True})
    md.enable(["strikethrough", "table"])
    md.use(tasklists_plugin)
    return md


def parse(text: str, options: Optional[ParseOptions] = None) -> Document:
    """
    converts markdown to sanitized HTML plus its headings and links.

    Args:
        text: markdown source
        options: parse options (defaults to ParseOptions())

    Returns:
        Document with html, headings and links
    """
    parse_opts = options or ParseOptions()

    md = create_markdown()
    env: dict[str, Any] = {}
    tokens = md.parse(text, env)

    transformer = StreamTransformer(parse_opts)
    tokens = transformer.transform(tokens)

    html = cast(str, md.renderer.render(tokens, md.options, env))

    return build_document(sanitize_html(html), transformer.headings, transformer.links)


def build_document(
    html: str, headings: Iterable[Heading], links: Iterable[Link]
) -> Document:
    """packages the sanitized HTML with headings and links in encounter order."""
    return Document(html=html, headings=tuple(headings), links=tuple(links))
