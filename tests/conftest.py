"""Shared test fixtures for snipsync."""

import io
import zipfile

import pytest

from snipsync.config import Features, Origin, SyncConfig
from snipsync.snippet.model import SourceFile, SourcePath, Snippet


def make_source(lines, name="main.go", directory="acme-widgets-abc123/pkg", ref=""):
    return SourceFile(
        path=SourcePath(directory=directory, name=name),
        lines=list(lines),
        owner="acme",
        repo="widgets",
        ref=ref,
    )


def make_snippet(snippet_id, lines, extension="js"):
    return Snippet(
        id=snippet_id,
        extension=extension,
        owner="acme",
        repo="widgets",
        ref="",
        source_path=SourcePath(directory="acme-widgets-abc123/src", name=f"x.{extension}"),
        lines=list(lines),
    )


def make_zip(files: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buf.getvalue()


class FakeArchiveClient:
    """Serves prebuilt archives keyed by owner/repo."""

    def __init__(self, archives: dict[str, bytes]):
        self.archives = archives
        self.calls = []

    def fetch_archive(self, owner, repo, ref=""):
        from snipsync.source.archive import ArchiveFetchError

        self.calls.append((owner, repo, ref))
        key = f"{owner}/{repo}"
        if key not in self.archives:
            raise ArchiveFetchError(f"GitHub returned 404 for {key}")
        return self.archives[key]


@pytest.fixture
def docs_config(tmp_path):
    (tmp_path / "docs").mkdir()
    return SyncConfig(
        origins=[Origin(owner="acme", repo="widgets")],
        target="docs",
        features=Features(enable_source_link=False),
        root=tmp_path,
    )
