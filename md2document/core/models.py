"""Data models for parsed markdown documents."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union


class ConfigError(ValueError):
    """raised when parse options cannot be built from user configuration."""


@dataclass(frozen=True)
class LocalUrl:
    """URL without a host, relative to the current site."""

    path: str

    def to_dict(self) -> dict[str, str]:
        return {"type": "local", "path": self.path}


@dataclass(frozen=True)
class RemoteUrl:
    """absolute URL with a scheme and a non-empty host."""

    url: str

    def to_dict(self) -> dict[str, str]:
        return {"type": "remote", "url": self.url}


UrlType = Union[LocalUrl, RemoteUrl]


@dataclass(frozen=True)
class Heading:
    """Document heading with its unique anchor."""

    title: str
    anchor: str
    level: int  # 1..6

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "anchor": self.anchor, "level": self.level}


@dataclass(frozen=True)
class Link:
    """Inline link with the text it wraps."""

    title: str
    url: UrlType

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url.to_dict()}


@dataclass(frozen=True)
class Document:
    """Sanitized HTML plus the outline and links collected while rendering."""

    html: str
    headings: tuple[Heading, ...] = ()
    links: tuple[Link, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "html": self.html,
            "headings": [h.to_dict() for h in self.headings],
            "links": [link.to_dict() for link in self.links],
        }


@dataclass
class ParseOptions:
    """Per-call rendering options."""

    # root URL for links that point to the current domain
    url_root: str = "/"
    # exact-match URL replacements, applied to links and images
    link_rewrite_rules: dict[str, str] = field(default_factory=dict)
    # query parameters appended to local links
    url_params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ParseOptions":
        """
        builds options from a plain mapping, e.g. a parsed TOML table.

        Args:
            data: mapping with optional url_root, link_rewrite_rules and
                url_params keys

        Returns:
            ParseOptions instance

        Raises:
            ConfigError: on a non-table, unknown keys or values of the wrong type
        """
        if not isinstance(data, Mapping):
            raise ConfigError(f"Options must be a table, got {type(data).__name__}")

        known = {"url_root", "link_rewrite_rules", "url_params"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

        url_root = data.get("url_root", "/")
        if not isinstance(url_root, str):
            raise ConfigError("url_root must be a string")

        return cls(
            url_root=url_root,
            link_rewrite_rules=_string_table(data, "link_rewrite_rules"),
            url_params=_string_table(data, "url_params"),
        )


def _string_table(data: Mapping[str, Any], key: str) -> dict[str, str]:
    """validates a table of string to string, keeping its order."""
    table = data.get(key, {})
    if not isinstance(table, Mapping):
        raise ConfigError(f"{key} must be a table")

    result: dict[str, str] = {}
    for name, value in table.items():
        if not isinstance(value, str):
            raise ConfigError(f"{key}.{name} must be a string")
        result[str(name)] = value
    return result


def parse_pair(pair: str) -> tuple[str, str]:
    """
    splits a KEY=VALUE command line argument.

    Raises:
        ConfigError: if the argument has no '=' or an empty key
    """
    key, sep, value = pair.partition("=")
    if not sep or not key:
        raise ConfigError(f"Expected KEY=VALUE, got {pair!r}")
    return key, value
