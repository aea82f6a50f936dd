"""Marker grammar shared by the capture and insertion passes.

All markers are matched by substring containment, case-sensitive, anywhere
on the line. The id on a start line follows the ``SNIPSTART`` keyword when
present, otherwise the marker itself.
"""

from __future__ import annotations

import re

# Capture markers, found in source files
CAPTURE_START = "@@@START"
CAPTURE_END = "@@@END"

# Insertion markers, found in target documents
INSERT_START = "<!--START"
INSERT_END = "<!--END"

ID_KEYWORD = "SNIPSTART"

CODE_FENCE = "```"

# One or more word-character groups joined by hyphens
_ID_TOKEN = r"(\w+(?:-\w+)*)"
_KEYWORD_ID_RE = re.compile(r"\b" + ID_KEYWORD + r"\s+" + _ID_TOKEN)
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


class MalformedMarkerError(ValueError):
    """A marker line that cannot be paired or whose id cannot be read."""

    def __init__(
        self,
        reason: str,
        line_number: int,
        line: str = "",
        path: str | None = None,
    ) -> None:
        self.reason = reason
        self.line_number = line_number
        self.line = line
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f"{self.path}:{self.line_number}" if self.path else f"line {self.line_number}"
        return f"{where}: {self.reason}: {self.line.strip()!r}"

    def with_path(self, path: str) -> MalformedMarkerError:
        """Return a copy labelled with the file it came from."""
        return MalformedMarkerError(self.reason, self.line_number, self.line, path)


def fence_open(extension: str) -> str:
    return CODE_FENCE + extension


def find_id(line: str, marker: str) -> str | None:
    """Return the id on a start-marker line, or None if there isn't one.

    The ``SNIPSTART`` keyword takes precedence; only the first match counts.
    """
    match = _KEYWORD_ID_RE.search(line)
    if match is None:
        match = re.search(re.escape(marker) + r"\s+" + _ID_TOKEN, line)
    if match is None:
        return None
    return match.group(1).strip()


def extract_id(line: str, marker: str, line_number: int = 0) -> str:
    """Return the id on a start-marker line.

    Raises:
        MalformedMarkerError: If the line carries no id.
    """
    snippet_id = find_id(line, marker)
    if snippet_id is None:
        raise MalformedMarkerError(f"no id after {marker}", line_number, line)
    return snippet_id


def determine_extension(name: str) -> str:
    """Return the text after the last '.', or the whole name if there is none."""
    return name.split(".")[-1]


def split_lines(text: str) -> list[str]:
    """Split file content into lines; a trailing newline adds no empty line."""
    if not text:
        return []
    lines = _NEWLINE_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"
