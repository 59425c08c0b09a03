"""Token stream transformation: anchors, link inventory, rewrites, emoji."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional

from markdown_it.token import Token

from md2document.core.emoji import substitute_emoji
from md2document.core.models import Heading, Link, ParseOptions, UrlType
from md2document.core.urls import append_url_params, link_target, resolve_url

logger = logging.getLogger(__name__)

MERMAID_OPEN = '<div class="mermaid">'
MERMAID_CLOSE = "</div>\n"

# link_open markup for links without a literal URL at the link site
AUTOLINK_MARKUP = ("autolink", "linkify")


@dataclass
class _PendingLink:
    url: UrlType
    title: list[str] = field(default_factory=list)


def fence_language(token: Token) -> str:
    """returns the first word of a fence's info string."""
    words = token.info.split(maxsplit=1)
    return words[0] if words else ""


def is_inline_link(token: Token) -> bool:
    """checks that a link_open token came from an inline [text](url) link."""
    # reference, collapsed and shortcut links carry their label when
    # the parser runs with store_labels
    return "label" not in token.meta and token.markup not in AUTOLINK_MARKUP


def slugify(title: str) -> str:
    """lowercases and dashes a heading title."""
    return title.strip().lower().replace(" ", "-")


class StreamTransformer:
    """
    rewrites a markdown-it token stream for a single document.

    Holds the per-call state: the heading waiting for its title, the heading
    counter and the link whose text is being collected. Headings and links
    are collected in the order they are encountered.
    """

    def __init__(self, options: ParseOptions) -> None:
        self.options = options
        self.headings: list[Heading] = []
        self.links: list[Link] = []
        self._heading_index = 1
        self._heading: Optional[Token] = None
        self._link: Optional[_PendingLink] = None

    def transform(self, tokens: Iterable[Token]) -> list[Token]:
        """
        transforms block-level tokens from MarkdownIt.parse.

        Args:
            tokens: token stream for one document

        Returns:
            transformed token stream, ready for the renderer
        """
        return list(self._iter_blocks(tokens))

    def _iter_blocks(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.type == "fence" and fence_language(token) == "mermaid":
                yield from mermaid_tokens(token)
            elif token.type == "heading_open":
                # held back until its title is known
                self._heading = token
            elif token.type == "heading_close":
                self._heading = None
                yield token
            elif token.type == "inline":
                heading = self._heading
                token.children = list(self._iter_inline(token.children or []))
                if heading is not None:
                    yield heading
                yield token
            else:
                yield token

    def _iter_inline(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.type == "text":
                self._on_text(token)
            elif token.type == "link_open":
                self._on_link_open(token)
            elif token.type == "link_close":
                self._on_link_close()
            elif token.type == "image":
                src = resolve_url(str(token.attrGet("src") or ""), self.options)
                token.attrSet("src", src)
                # alt text counts towards the enclosing link's title
                token.children = list(self._iter_inline(token.children or []))
            yield token

    def _on_text(self, token: Token) -> None:
        text = substitute_emoji(token.content)
        token.content = text

        if self._heading is not None:
            self._anchor_heading(self._heading, text)
            self._heading = None

        if self._link is not None:
            self._link.title.append(text)

    def _anchor_heading(self, heading: Token, title: str) -> None:
        anchor = f"{slugify(title)}-{self._heading_index}"
        heading.attrSet("id", anchor)
        self.headings.append(
            Heading(title=title, anchor=anchor, level=int(heading.tag[1:]))
        )
        self._heading_index += 1

    def _on_link_open(self, token: Token) -> None:
        href = resolve_url(str(token.attrGet("href") or ""), self.options)
        href = append_url_params(href, self.options.url_params)
        token.attrSet("href", href)

        if not is_inline_link(token):
            return

        url = link_target(href)
        if url is None:
            logger.debug("Dropping link with unparsable URL: %s", href)
            return

        self._link = _PendingLink(url=url)

    def _on_link_close(self) -> None:
        if self._link is None:
            return

        self.links.append(Link(title="".join(self._link.title), url=self._link.url))
        self._link = None


def mermaid_tokens(fence: Token) -> list[Token]:
    """replaces a mermaid fence with a div around its escaped source."""
    return [
        Token("html_block", "", 0, content=MERMAID_OPEN, block=True),
        Token("text", "", 0, content=fence.content, block=True),
        Token("html_block", "", 0, content=MERMAID_CLOSE, block=True),
    ]
