"""Data types for source files and the snippets harvested from them."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourcePath:
    """Location of a file inside an unpacked archive.

    ``directory`` is relative to the staging root, so its first segment is
    the archive's top-level folder rather than part of the repository path.
    """

    directory: str
    name: str

    @property
    def repo_relative(self) -> str:
        """Path inside the repository: directory minus its first segment, then the name."""
        parts = self.directory.split("/")
        return "/".join([*parts[1:], self.name])


@dataclass
class SourceFile:
    """Lines of one file from an origin repository."""

    path: SourcePath
    lines: list[str]
    owner: str = ""
    repo: str = ""
    ref: str = ""

    @property
    def label(self) -> str:
        if not self.owner:
            return self.path.repo_relative
        return f"{self.owner}/{self.repo}:{self.path.repo_relative}"


@dataclass
class Snippet:
    """A named block of lines captured from a source file."""

    id: str
    extension: str
    owner: str
    repo: str
    ref: str
    source_path: SourcePath
    lines: list[str] = field(default_factory=list)
    formatted: bool = False
