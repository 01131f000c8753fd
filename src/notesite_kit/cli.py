# src/notesite_kit/cli.py

import argparse
import logging
import sys
import warnings
from collections.abc import Sequence
from pathlib import Path

from notesite_kit.config import BuildConfig, load_build_config
from notesite_kit.errors import ConfigError, ContentConflictWarning, LinkError, format_path
from notesite_kit.pipeline import build_site

EXIT_OK = 0
EXIT_LINK_ERRORS = 1
EXIT_USAGE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notesite",
        description="Build a navigable static site from markdown notes.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    build = commands.add_parser("build", help="build the site")
    build.add_argument("input_dir", type=Path, help="directory of note files")
    build.add_argument("output_dir", type=Path, help="where pages are written")
    build.add_argument("--config", type=Path, help="YAML build configuration")
    build.add_argument("--threshold", type=float, help="duplicate similarity threshold")
    build.add_argument("--page-depth", type=int, help="deepest heading level with its own page")
    build.add_argument("--title", help="site title")
    build.add_argument("--style", help="pygments style for code blocks")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_build_config(args.config) if args.config else BuildConfig()
        config = config.with_overrides(
            duplicate_threshold=args.threshold,
            page_depth=args.page_depth,
            site_title=args.title,
            highlight_style=args.style,
        )
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    with warnings.catch_warnings():
        # conflicts are already reported through logging by the merger
        warnings.simplefilter("ignore", ContentConflictWarning)
        try:
            result = build_site(args.input_dir, args.output_dir, config)
        except LinkError as exc:
            print(
                f"build failed: {exc.reason} '#{exc.slug}' in section "
                f"'{format_path(exc.heading_path)}'",
                file=sys.stderr,
            )
            return EXIT_LINK_ERRORS
        except (ConfigError, OSError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_USAGE

    print(
        f"Built {len(result.pages)} pages into {args.output_dir} "
        f"({len(result.conflicts)} content conflicts)"
    )
    return EXIT_OK


def cli() -> None:
    sys.exit(main())
