"""Markdown to sanitized HTML with outline and link extraction."""

import argparse
import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

from md2document.convert import EXPORTERS, convert_files
from md2document.core.models import ConfigError, ParseOptions, parse_pair

logger = logging.getLogger(__name__)


def load_options(
    config: Optional[Path] = None,
    url_root: Optional[str] = None,
    rewrites: Optional[list[str]] = None,
    params: Optional[list[str]] = None,
) -> ParseOptions:
    """
    builds parse options from a TOML config file and command line overrides.

    The config file may hold the options in a [md2document] table or at its
    top level. Command line values win over config file values.

    Args:
        config: optional path to a TOML file
        url_root: optional url_root override
        rewrites: FROM=TO link rewrite rules
        params: KEY=VALUE URL parameters

    Returns:
        ParseOptions instance

    Raises:
        ConfigError: if the config file or a KEY=VALUE pair is malformed
    """
    data: dict[str, Any] = {}
    if config is not None:
        try:
            with open(config, "rb") as f:
                raw = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot read config {config}: {e}") from e
        data = raw.get("md2document", raw)

    options = ParseOptions.from_mapping(data)

    if url_root is not None:
        options.url_root = url_root
    for pair in rewrites or []:
        key, value = parse_pair(pair)
        options.link_rewrite_rules[key] = value
    for pair in params or []:
        key, value = parse_pair(pair)
        options.url_params[key] = value

    return options


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for md2document CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Convert markdown to sanitized HTML with headings and links"
    )
    parser.add_argument(
        "source",
        help="markdown file, directory of markdown files, or ZIP archive",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        default="output",
        help="output directory (default: output)",
    )
    parser.add_argument(
        "--format",
        choices=sorted(EXPORTERS),
        default="html",
        help="output format (default: html)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="TOML file with url_root, link_rewrite_rules and url_params",
    )
    parser.add_argument(
        "--url-root",
        help="root URL for links to the current site (default: /)",
    )
    parser.add_argument(
        "--rewrite",
        action="append",
        default=[],
        metavar="FROM=TO",
        help="replace a link or image URL exactly matching FROM (repeatable)",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="query parameter appended to local links (repeatable)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="convert files but don't write output",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace existing output files",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="only print errors",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show a progress bar",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    try:
        options = load_options(args.config, args.url_root, args.rewrite, args.param)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    try:
        return convert_files(
            source=source_path,
            destination=args.destination,
            options=options,
            output_format=args.format,
            dry_run=args.dry_run,
            overwrite=args.overwrite,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 2
