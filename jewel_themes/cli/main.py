from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from ..core.logger import configure_logging
from .commands import (
    resolve as cmd_resolve,
    themes as cmd_themes,
    explain as cmd_explain,
)


def entrypoint():
    sys.exit(main())


def _add_engine_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--themes-dir",
        dest="themes_dirs",
        action="append",
        default=[],
        help="Extra directory searched for <identity>.properties (repeatable)",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON engine configuration file",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Fail on cyclic variable references instead of keeping raw text",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jewel-themes", description="Jewel theme defaults resolver"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only show warnings and errors"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    r = sub.add_parser("resolve", help="Resolve the defaults table for a theme")
    r.add_argument("theme", type=str, help="Theme name or identity")
    r.add_argument(
        "--base",
        type=str,
        default=None,
        help="JSON object with base defaults to resolve on top of",
    )
    r.add_argument("--json", action="store_true", help="Print the table as JSON")
    r.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    r.add_argument(
        "--prefix",
        type=str,
        default=None,
        help="Only show keys starting with this prefix (e.g. 'Button.')",
    )
    _add_engine_options(r)

    sub.add_parser("themes", help="List bundled themes")

    e = sub.add_parser("explain", help="Show how a single key resolves")
    e.add_argument("theme", type=str, help="Theme name or identity")
    e.add_argument("key", type=str, help="Property key, e.g. Button.arc")
    _add_engine_options(e)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "theme", None) is not None and not args.theme.strip():
        parser.error("theme must not be empty")
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.command == "resolve":
        return cmd_resolve.run(args)
    elif args.command == "themes":
        return cmd_themes.run(args)
    elif args.command == "explain":
        return cmd_explain.run(args)
    return 2


if __name__ == "__main__":
    entrypoint()
