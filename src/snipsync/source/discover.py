"""Walk directories and load file lines."""

from __future__ import annotations

import logging
from pathlib import Path

from snipsync.grammar import join_lines, split_lines
from snipsync.snippet.model import SourcePath

logger = logging.getLogger(__name__)


def discover_files(root: Path | str) -> list[Path]:
    """Every regular file under ``root``, sorted by relative path."""
    base = Path(root)
    if not base.is_dir():
        return []
    return sorted(
        (p for p in base.rglob("*") if p.is_file()),
        key=lambda p: p.relative_to(base).as_posix(),
    )


def discover_source_paths(root: Path | str) -> list[SourcePath]:
    """Files under ``root`` as SourcePaths relative to it."""
    base = Path(root)
    paths = []
    for path in discover_files(base):
        parent = path.parent.relative_to(base).as_posix()
        paths.append(SourcePath(directory="" if parent == "." else parent, name=path.name))
    return paths


def read_lines(path: Path | str) -> list[str] | None:
    """Read a UTF-8 text file as lines, or None if it can't be decoded."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable file %s: %s", path, e)
        return None
    return split_lines(text)


def write_lines(path: Path | str, lines: list[str]) -> None:
    Path(path).write_text(join_lines(lines), encoding="utf-8")
