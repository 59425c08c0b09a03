"""tests for URL classification and rewriting."""

import pytest

from md2document.core.models import LocalUrl, ParseOptions, RemoteUrl
from md2document.core.urls import (
    append_url_params,
    classify_url,
    is_local_url,
    link_target,
    resolve_url,
)


@pytest.mark.parametrize(
    "url",
    [
        "relative/link",
        "/foo/bar",
        "#section",
        "?page=2",
        "mailto:someone@example.com",
        "file:///tmp/notes.md",
        "//cdn.example.com/lib.js",
    ],
)
def test_classifies_local_urls(url: str) -> None:
    """URLs without scheme or host are local."""
    assert classify_url(url) == LocalUrl(url)
    assert is_local_url(url)


@pytest.mark.parametrize(
    "url",
    [
        "https://x.com/y",
        "http://www.example.com/",
        "ftp://files.example.com:21/pub",
    ],
)
def test_classifies_remote_urls(url: str) -> None:
    """absolute URLs with a host are remote."""
    assert classify_url(url) == RemoteUrl(url)
    assert not is_local_url(url)


@pytest.mark.parametrize(
    "url",
    ["http://example.com:99999/", "http://example.com:port/", "http://[::1/"],
)
def test_unparsable_urls(url: str) -> None:
    """parse failures other than missing scheme or host classify as None."""
    assert classify_url(url) is None
    assert not is_local_url(url)


def test_rewrite_rule_wins() -> None:
    """exact rewrite rules replace the whole URL."""
    options = ParseOptions(url_root="/docs", link_rewrite_rules={"/a": "https://b.org/"})
    assert resolve_url("/a", options) == "https://b.org/"


def test_rewrite_rule_is_exact_match() -> None:
    """rules don't match prefixes."""
    options = ParseOptions(link_rewrite_rules={"/a": "https://b.org/"})
    assert resolve_url("/a/b", options) == "/a/b"


@pytest.mark.parametrize(
    "url_root,expected",
    [
        ("/", "/foo/bar"),
        ("/docs", "/docs/foo/bar"),
        ("/docs/", "/docs/foo/bar"),
        ("https://cdn.example.com/site", "https://cdn.example.com/site/foo/bar"),
    ],
)
def test_rebases_root_relative_paths(url_root: str, expected: str) -> None:
    """root-relative paths move under url_root."""
    assert resolve_url("/foo/bar", ParseOptions(url_root=url_root)) == expected


@pytest.mark.parametrize(
    "url",
    ["relative/link", "https://x.com/y", "//cdn.example.com/lib.js", "#top"],
)
def test_leaves_other_urls_alone(url: str) -> None:
    """relative, remote and protocol-relative URLs are untouched."""
    assert resolve_url(url, ParseOptions(url_root="/docs")) == url


def test_appends_single_param() -> None:
    """adds a query string to local URLs."""
    assert append_url_params("relative/link", {"base": "123"}) == "relative/link?base=123"


def test_appends_params_in_order() -> None:
    """parameters keep the mapping order."""
    params = {"base": "123", "other": "456"}
    assert append_url_params("relative/link", params) == (
        "relative/link?base=123&other=456"
    )


def test_param_values_are_encoded() -> None:
    """special characters are URL encoded."""
    assert append_url_params("a", {"q": "x y&z"}) == "a?q=x+y%26z"


def test_extends_existing_query() -> None:
    """existing query strings are extended."""
    assert append_url_params("page?x=1", {"base": "123"}) == "page?x=1&base=123"


def test_keeps_fragment_last() -> None:
    """parameters go before the fragment."""
    assert append_url_params("page#top", {"base": "123"}) == "page?base=123#top"


def test_never_touches_remote_urls() -> None:
    """remote URLs are never altered."""
    url = "http://www.example.com/"
    assert append_url_params(url, {"base": "123"}) == url


def test_never_touches_unparsable_urls() -> None:
    """unparsable URLs are never altered."""
    url = "http://example.com:99999/"
    assert append_url_params(url, {"base": "123"}) == url


def test_no_params_is_a_no_op() -> None:
    """empty params leave the URL alone."""
    assert append_url_params("relative/link", {}) == "relative/link"


def test_rewrite_rule_matches_decoded_url() -> None:
    """rules keyed by the source form match the parser's encoded form."""
    options = ParseOptions(link_rewrite_rules={"/café.md": "https://b.org/cafe"})
    assert resolve_url("/caf%C3%A9.md", options) == "https://b.org/cafe"


def test_rewrite_rule_matches_encoded_url() -> None:
    """rules keyed by the encoded form still match."""
    options = ParseOptions(link_rewrite_rules={"/my%20file.pdf": "/files/1"})
    assert resolve_url("/my%20file.pdf", options) == "/files/1"


def test_link_target_decodes_url() -> None:
    """link targets keep the URL as the author wrote it."""
    assert link_target("/caf%C3%A9.md") == LocalUrl("/café.md")
    assert link_target("https://example.com/my%20file") == RemoteUrl(
        "https://example.com/my file"
    )
    assert link_target("http://example.com:99999/") is None
