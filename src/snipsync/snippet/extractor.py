"""Harvest snippets from capture regions in source files.

A capture region opens on a line containing ``@@@START`` and closes on the
next line containing ``@@@END``. Neither marker line is part of the body.
Regions are flat: a second start before the end is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from snipsync.grammar import (
    CAPTURE_END,
    CAPTURE_START,
    MalformedMarkerError,
    determine_extension,
    extract_id,
)
from snipsync.snippet.model import SourceFile, Snippet


class CaptureState(Enum):
    IDLE = "idle"
    CAPTURING = "capturing"


@dataclass
class ExtractionResult:
    """Snippets found in one or more source files."""

    snippets: list[Snippet] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    files_scanned: int = 0

    def merge(self, other: ExtractionResult) -> None:
        self.snippets.extend(other.snippets)
        self.warnings.extend(other.warnings)
        self.errors.extend(other.errors)
        self.files_scanned += other.files_scanned


class _Capture:
    """Single-slot capture machine: IDLE <-> CAPTURING."""

    def __init__(self) -> None:
        self.state = CaptureState.IDLE
        self.current: Snippet | None = None
        self.opened_at = 0

    def open(self, snippet: Snippet, line_number: int) -> None:
        self.state = CaptureState.CAPTURING
        self.current = snippet
        self.opened_at = line_number

    def close(self) -> None:
        self.state = CaptureState.IDLE
        self.current = None


def extract_snippets(source: SourceFile) -> ExtractionResult:
    """Scan one source file and return the snippets it defines.

    Args:
        source: The file's lines plus the origin they came from.

    Returns:
        ExtractionResult with snippets in the order their start markers
        appear. A capture still open at end of file is kept with the lines
        it absorbed and reported as a warning. A repeated id keeps the first
        capture and warns about the rest.

    Raises:
        MalformedMarkerError: On a start marker without an id, or a start
            marker inside an open capture.
    """
    result = ExtractionResult(files_scanned=1)
    extension = determine_extension(source.path.name)
    capture = _Capture()
    first_seen: dict[str, int] = {}

    for line_number, line in enumerate(source.lines, start=1):
        if capture.state is CaptureState.CAPTURING and CAPTURE_END in line:
            # an end and a start on one line close one capture and open the next
            capture.close()
        elif capture.state is CaptureState.CAPTURING:
            if CAPTURE_START in line:
                raise MalformedMarkerError(
                    f"nested {CAPTURE_START} inside capture opened on line {capture.opened_at}",
                    line_number, line, source.label,
                )
            capture.current.lines.append(line)
            continue

        if CAPTURE_START in line:
            try:
                snippet_id = extract_id(line, CAPTURE_START, line_number)
            except MalformedMarkerError as e:
                raise e.with_path(source.label) from None
            snippet = Snippet(
                id=snippet_id,
                extension=extension,
                owner=source.owner,
                repo=source.repo,
                ref=source.ref,
                source_path=source.path,
            )
            capture.open(snippet, line_number)
            if snippet_id in first_seen:
                # body is consumed but dropped
                result.warnings.append(
                    f"{source.label}:{line_number}: duplicate id '{snippet_id}' "
                    f"(first captured on line {first_seen[snippet_id]}); skipped"
                )
                continue
            first_seen[snippet_id] = line_number
            result.snippets.append(snippet)

    if capture.state is CaptureState.CAPTURING:
        result.warnings.append(
            f"{source.label}:{capture.opened_at}: unterminated capture "
            f"'{capture.current.id}' ran to end of file"
        )

    return result


def extract_all(sources: list[SourceFile]) -> ExtractionResult:
    """Extract from many files, recording malformed files instead of stopping."""
    combined = ExtractionResult()
    for source in sources:
        try:
            combined.merge(extract_snippets(source))
        except MalformedMarkerError as e:
            combined.files_scanned += 1
            combined.errors.append({"path": e.path, "line": e.line_number, "error": str(e)})
    return combined
