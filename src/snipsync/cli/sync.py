"""Sync, clear, and extract CLI commands."""

import argparse
from pathlib import Path

import yaml


def _load(args: argparse.Namespace):
    from snipsync.config import load_config
    from snipsync.paths import config_path

    path = Path(args.config) if args.config else config_path()
    try:
        return load_config(path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"  ERROR: cannot load config {path}: {e}")
        return None


def _report(title: str, result, show_snippets: bool = False) -> int:
    print(title)
    print("─" * 40)
    if show_snippets:
        print(f"  Snippets:  {result.snippets}")
        if result.unused:
            print(f"  Unused:    {len(result.unused)}")
    print(f"  Updated:   {len(result.updated)}")
    for name in result.updated:
        print(f"    - {name}")
    print(f"  Unchanged: {len(result.unchanged)}")
    if result.warnings:
        print(f"  Warnings:  {len(result.warnings)}")
        for w in result.warnings:
            print(f"    - {w}")
    if result.errors:
        print(f"  Errors:    {len(result.errors)}")
        for e in result.errors:
            print(f"    - {e['error']}")

    if result.dry_run:
        print("\n[DRY RUN] No files were modified.")

    return 1 if result.errors else 0


def cmd_sync(args: argparse.Namespace) -> int:
    from snipsync.sync import run_sync

    config = _load(args)
    if config is None:
        return 1

    result = run_sync(
        config,
        staging_dir=args.staging_dir,
        dry_run=args.dry_run,
        keep_staging=args.keep_staging,
        show_progress=not args.no_progress,
    )
    return _report("Snippet Sync Results", result, show_snippets=True)


def cmd_clear(args: argparse.Namespace) -> int:
    from snipsync.sync import run_clear

    config = _load(args)
    if config is None:
        return 1

    result = run_clear(config, dry_run=args.dry_run, show_progress=not args.no_progress)
    return _report("Snippet Clear Results", result)


def cmd_extract(args: argparse.Namespace) -> int:
    from snipsync.snippet.formatter import format_snippet
    from snipsync.sync import extract_directory

    root = Path(args.path)
    if not root.is_dir():
        print(f"  ERROR: not a directory: {root}")
        return 1

    result = extract_directory(root, owner=args.owner, repo=args.repo, ref=args.ref)
    print(f"Found {len(result.snippets)} snippets in {result.files_scanned} files:\n")
    for snippet in result.snippets:
        print(f"  {snippet.id}  ({snippet.source_path.repo_relative}, {len(snippet.lines)} lines)")
        if args.show:
            format_snippet(snippet, args.source_link)
            for line in snippet.lines:
                print(f"    {line}")
    for w in result.warnings:
        print(f"  WARN {w}")
    for e in result.errors:
        print(f"  FAIL {e['error']}")
    return 1 if result.errors else 0
