"""Target documents and the insertion regions found in them."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MarkerRegion:
    """An insertion region found during one scan.

    Indices are 0-based positions of the start and end marker lines and
    are only valid until the file is next modified.
    """

    id: str
    start: int
    end: int

    @property
    def interior(self) -> tuple[int, int]:
        return self.start + 1, self.end


@dataclass
class TargetFile:
    """A document whose lines are rewritten in place."""

    filename: str
    lines: list[str] = field(default_factory=list)
    original: list[str] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.original:
            self.original = list(self.lines)

    @property
    def changed(self) -> bool:
        return self.lines != self.original

    def replace_range(self, start: int, end: int, new_lines: list[str]) -> int:
        """Replace ``lines[start:end]`` with a copy of ``new_lines``.

        Returns:
            Change in line count, for shifting indices below the range.
        """
        if not 0 <= start <= end <= len(self.lines):
            raise IndexError(f"range {start}:{end} outside {self.filename} ({len(self.lines)} lines)")
        self.lines[start:end] = list(new_lines)
        return len(new_lines) - (end - start)
