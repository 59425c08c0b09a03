"""HTML sanitization policy for rendered documents."""

import bleach

ALLOWED_TAGS = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "b",
        "bdi",
        "bdo",
        "blockquote",
        "br",
        "caption",
        "cite",
        "code",
        "col",
        "colgroup",
        "dd",
        "del",
        "details",
        "dfn",
        "div",
        "dl",
        "dt",
        "em",
        "figcaption",
        "figure",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "i",
        "img",
        "ins",
        "kbd",
        "li",
        "mark",
        "ol",
        "p",
        "pre",
        "q",
        "s",
        "samp",
        "small",
        "span",
        "strike",
        "strong",
        "sub",
        "summary",
        "sup",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "tt",
        "u",
        "ul",
        "var",
        "wbr",
    }
)

ALIGN_ATTRIBUTES = ["align", "char", "charoff"]
CELL_ATTRIBUTES = ALIGN_ATTRIBUTES + ["colspan", "rowspan", "headers"]
HEADING_ATTRIBUTES = ["id"]


def _mermaid_only(_tag: str, name: str, value: str) -> bool:
    """divs may only carry the mermaid class."""
    return name == "class" and value == "mermaid"


ALLOWED_ATTRIBUTES = {
    "*": ["lang", "title"],
    # no rel: links are rendered without one
    "a": ["href", "hreflang"],
    "bdo": ["dir"],
    "blockquote": ["cite"],
    "code": ["class"],
    "col": ALIGN_ATTRIBUTES + ["span"],
    "colgroup": ALIGN_ATTRIBUTES + ["span"],
    "del": ["cite", "datetime"],
    "div": _mermaid_only,
    "h1": HEADING_ATTRIBUTES,
    "h2": HEADING_ATTRIBUTES,
    "h3": HEADING_ATTRIBUTES,
    "h4": HEADING_ATTRIBUTES,
    "h5": HEADING_ATTRIBUTES,
    "h6": HEADING_ATTRIBUTES,
    "hr": ["align", "size", "width"],
    "img": ["align", "alt", "height", "src", "width"],
    "ins": ["cite", "datetime"],
    "ol": ["start"],
    "q": ["cite"],
    "table": ALIGN_ATTRIBUTES + ["summary"],
    "tbody": ALIGN_ATTRIBUTES,
    "td": CELL_ATTRIBUTES,
    "tfoot": ALIGN_ATTRIBUTES,
    "th": CELL_ATTRIBUTES + ["scope"],
    "thead": ALIGN_ATTRIBUTES,
    "tr": ALIGN_ATTRIBUTES,
}

ALLOWED_PROTOCOLS = frozenset(
    {
        "ftp",
        "ftps",
        "geo",
        "http",
        "https",
        "irc",
        "ircs",
        "magnet",
        "mailto",
        "news",
        "nntp",
        "sip",
        "sms",
        "ssh",
        "tel",
        "webcal",
        "xmpp",
    }
)


def sanitize_html(html: str) -> str:
    """
    removes every tag and attribute not on the allow-list.

    Disallowed tags are stripped (their text is kept and escaped), comments
    are dropped, and the output stays well-formed. Applying it twice gives
    the same result as applying it once.

    Args:
        html: rendered HTML

    Returns:
        sanitized HTML
    """
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
