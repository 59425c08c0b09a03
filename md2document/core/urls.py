"""URL classification and rewriting for links and images."""

import logging
import posixpath
from collections.abc import Mapping
from typing import Optional
from urllib.parse import unquote, urlencode, urlsplit

from md2document.core.models import LocalUrl, ParseOptions, RemoteUrl, UrlType

logger = logging.getLogger(__name__)


def classify_url(url: str) -> Optional[UrlType]:
    """
    classifies a URL as local or remote.

    A URL is remote iff it parses as an absolute URL with a non-empty host.
    A missing scheme or an empty host makes it local.

    Args:
        url: URL as it appears in the rendered document

    Returns:
        RemoteUrl, LocalUrl, or None if the URL cannot be parsed at all
    """
    try:
        parts = urlsplit(url)
        if not parts.scheme:
            return LocalUrl(url)
        if not parts.hostname:
            return LocalUrl(url)
        # raises ValueError for out-of-range or non-numeric ports
        _ = parts.port
    except ValueError:
        logger.debug("Unparsable URL: %s", url)
        return None

    return RemoteUrl(url)


def is_local_url(url: str) -> bool:
    """returns True if the URL has no host (current site)."""
    return isinstance(classify_url(url), LocalUrl)


def resolve_url(url: str, options: ParseOptions) -> str:
    """
    resolves a link or image URL against the parse options.

    An exact rewrite rule wins; otherwise root-relative paths are rebased onto
    url_root; anything else (relative paths, remote URLs) is left alone.

    Rules are keyed by the URL as written in the source, so the lookup tries
    the decoded form of the parser-normalized URL before the encoded one.

    Args:
        url: link or image URL as normalized by the parser
        options: parse options

    Returns:
        resolved URL
    """
    for candidate in (unquote(url), url):
        rewritten = options.link_rewrite_rules.get(candidate)
        if rewritten is not None:
            logger.debug("Rewrote %s -> %s", candidate, rewritten)
            return rewritten

    # protocol-relative URLs (//host/path) point elsewhere
    if url.startswith("/") and not url.startswith("//"):
        return posixpath.join(options.url_root, url[1:])

    return url


def append_url_params(url: str, params: Mapping[str, str]) -> str:
    """
    appends query parameters to a local URL.

    Parameters keep the mapping's order. Remote and unparsable URLs are
    returned unchanged.

    Args:
        url: resolved link URL
        params: query parameters to append

    Returns:
        URL with the parameters added to its query string
    """
    if not params or not is_local_url(url):
        return url

    base, hash_sign, fragment = url.partition("#")
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(params)}{hash_sign}{fragment}"


def link_target(href: str) -> Optional[UrlType]:
    """
    classifies a rendered href and records it as written by the author.

    Args:
        href: final, parser-encoded link URL

    Returns:
        LocalUrl or RemoteUrl holding the decoded URL, or None if unparsable
    """
    url = classify_url(href)
    if isinstance(url, RemoteUrl):
        return RemoteUrl(unquote(href))
    if isinstance(url, LocalUrl):
        return LocalUrl(unquote(href))
    return None
