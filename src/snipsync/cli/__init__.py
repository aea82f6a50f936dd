"""Command-line interface for snipsync.

Usage:
    snipsync sync [--dry-run] [--keep-staging] [--staging-dir <path>] [--no-progress]
    snipsync clear [--dry-run] [--no-progress]
    snipsync extract <path> [--owner X] [--repo X] [--ref X] [--show] [--source-link]

Global options:
    --config <path>   Config file (default: $SNIPSYNC_CONFIG or ./snipsync.yaml)
    -v, --verbose     Debug logging
"""

import argparse
import logging
import sys

from snipsync import __version__
from snipsync.cli.sync import cmd_clear, cmd_extract, cmd_sync


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snipsync",
        description="Sync code snippets from source repositories into documentation",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", default=None,
        help="Path to the YAML config file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # sync
    sync = sub.add_parser("sync", help="Download origins and splice snippets into targets")
    sync.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )
    sync.add_argument(
        "--staging-dir", default=None,
        help="Where archives are unpacked (default: $SNIPSYNC_STAGING_DIR or ./sync_repos)",
    )
    sync.add_argument(
        "--keep-staging", action="store_true",
        help="Leave unpacked archives in place afterwards",
    )
    sync.add_argument(
        "--no-progress", action="store_true",
        help="Hide progress bars",
    )

    # clear
    clear = sub.add_parser("clear", help="Empty every insertion region in the targets")
    clear.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )
    clear.add_argument(
        "--no-progress", action="store_true",
        help="Hide progress bars",
    )

    # extract
    ext = sub.add_parser("extract", help="List snippets defined in a local directory")
    ext.add_argument("path", help="Directory to scan")
    ext.add_argument("--owner", default="", help="Owner used in source links")
    ext.add_argument("--repo", default="", help="Repository used in source links")
    ext.add_argument("--ref", default="", help="Ref used in source links")
    ext.add_argument(
        "--show", action="store_true",
        help="Print each snippet as it would be inserted",
    )
    ext.add_argument(
        "--source-link", action="store_true",
        help="Include the source link when printing with --show",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "sync": cmd_sync,
        "clear": cmd_clear,
        "extract": cmd_extract,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
