"""Splice formatted snippets into insertion regions, or clear those regions.

An insertion region opens on a line containing ``<!--START <id>`` and closes
on the next line containing ``<!--END``. Both marker lines are preserved;
only the lines between them are replaced or erased.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from snipsync.grammar import INSERT_END, INSERT_START, MalformedMarkerError, extract_id
from snipsync.snippet.model import Snippet
from snipsync.target.model import MarkerRegion, TargetFile


@dataclass
class SpliceResult:
    """Outcome of splicing or clearing a set of target files."""

    regions_written: int = 0
    matched_ids: set[str] = field(default_factory=set)
    warnings: list[str] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def unused(self, snippets: Iterable[Snippet]) -> list[str]:
        """Ids of snippets that found no insertion region."""
        return [s.id for s in snippets if s.id not in self.matched_ids]


def scan_regions(
    lines: list[str],
    path: str | None = None,
    warnings: list[str] | None = None,
) -> list[MarkerRegion]:
    """Find every closed insertion region, top to bottom.

    A start marker left open at end of file yields no region, and neither
    does a start followed by an end on the same line; both are noted
    in ``warnings`` when a list is given.

    Raises:
        MalformedMarkerError: On a start marker without an id, or a start
            marker while another region is still open.
    """
    regions: list[MarkerRegion] = []
    open_id: str | None = None
    open_at = 0

    for idx, line in enumerate(lines):
        if INSERT_START in line:
            if open_id is not None:
                raise MalformedMarkerError(
                    f"nested {INSERT_START} inside region '{open_id}' opened on line {open_at + 1}",
                    idx + 1, line, path,
                )
            try:
                open_id = extract_id(line, INSERT_START, idx + 1)
            except MalformedMarkerError as e:
                if path:
                    raise e.with_path(path) from None
                raise
            if INSERT_END in line[line.index(INSERT_START):]:
                # start and end on one line leave no interior to fill
                if warnings is not None:
                    where = f"{path}:{idx + 1}" if path else f"line {idx + 1}"
                    warnings.append(f"{where}: insertion '{open_id}' opens and closes on one line; skipped")
                open_id = None
                continue
            open_at = idx
        elif INSERT_END in line and open_id is not None:
            regions.append(MarkerRegion(open_id, open_at, idx))
            open_id = None

    if open_id is not None and warnings is not None:
        where = f"{path}:{open_at + 1}" if path else f"line {open_at + 1}"
        warnings.append(f"{where}: unterminated insertion '{open_id}' has no {INSERT_END}")

    return regions


def splice_snippet(snippet: Snippet, target: TargetFile) -> int:
    """Replace the interior of every region matching ``snippet.id``.

    Scans the file as it currently stands, then rewrites matching regions
    top to bottom, shifting later indices by each replacement's size.

    Returns:
        Number of regions written.
    """
    shift = 0
    written = 0
    for region in scan_regions(target.lines, target.filename):
        if region.id != snippet.id:
            continue
        start, end = region.interior
        shift += target.replace_range(start + shift, end + shift, snippet.lines)
        written += 1
    return written


def splice_snippets(
    snippets: Mapping[str, Snippet] | Iterable[Snippet],
    targets: list[TargetFile],
) -> SpliceResult:
    """Splice each snippet into every target file.

    Files with malformed markers are left untouched and reported in
    ``errors``; the rest are processed.
    """
    if isinstance(snippets, Mapping):
        snippets = snippets.values()
    snippets = list(snippets)

    result = SpliceResult()
    valid: list[TargetFile] = []
    for target in targets:
        try:
            scan_regions(target.lines, target.filename, result.warnings)
        except MalformedMarkerError as e:
            _reject(result, target, e)
            continue
        valid.append(target)

    for snippet in snippets:
        for target in list(valid):
            try:
                written = splice_snippet(snippet, target)
            except MalformedMarkerError as e:
                # spliced content introduced markers that no longer pair up
                valid.remove(target)
                _reject(result, target, e)
                continue
            if written:
                result.regions_written += written
                result.matched_ids.add(snippet.id)

    return result


def _reject(result: SpliceResult, target: TargetFile, error: MalformedMarkerError) -> None:
    target.lines = list(target.original)
    result.failed.append(target.filename)
    result.errors.append({"path": target.filename, "line": error.line_number, "error": str(error)})


def clear_file(target: TargetFile, warnings: list[str] | None = None) -> int:
    """Erase the interior of every insertion region, keeping the markers.

    Returns:
        Number of regions cleared.
    """
    regions = scan_regions(target.lines, target.filename, warnings)
    for region in reversed(regions):
        start, end = region.interior
        target.replace_range(start, end, [])
    return len(regions)


def clear_files(targets: list[TargetFile]) -> SpliceResult:
    result = SpliceResult()
    for target in targets:
        try:
            result.regions_written += clear_file(target, result.warnings)
        except MalformedMarkerError as e:
            _reject(result, target, e)
    return result
