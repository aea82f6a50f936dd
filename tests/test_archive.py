"""Tests for archive download and unpacking."""

import httpx
import pytest

from snipsync.snippet.model import SourcePath
from snipsync.source.archive import ArchiveFetchError, GitHubArchiveClient, unpack_archive
from snipsync.source.discover import discover_files, discover_source_paths, read_lines

from conftest import make_zip


def _client(handler, token=None):
    return GitHubArchiveClient(token=token, client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestGitHubArchiveClient:
    def test_fetch_with_ref(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, content=b"zipdata")

        client = _client(handler, token="t0k")
        assert client.fetch_archive("acme", "widgets", "v1") == b"zipdata"
        assert seen["url"] == "https://api.github.com/repos/acme/widgets/zipball/v1"
        assert seen["auth"] == "Bearer t0k"

    def test_fetch_default_branch(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, content=b"z")

        _client(handler).fetch_archive("acme", "widgets", "")
        assert seen["url"] == "https://api.github.com/repos/acme/widgets/zipball"
        assert seen["auth"] is None

    def test_non_200_raises(self):
        client = _client(lambda request: httpx.Response(404, text="Not Found"))
        with pytest.raises(ArchiveFetchError) as exc_info:
            client.fetch_archive("acme", "missing", "")
        assert "404" in str(exc_info.value)

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(ArchiveFetchError):
            _client(handler).fetch_archive("acme", "widgets", "")


class TestUnpackArchive:
    def test_lists_files_relative_to_destination(self, tmp_path):
        data = make_zip({
            "acme-widgets-abc/README.md": "# hi\n",
            "acme-widgets-abc/pkg/foo/bar.go": "package foo\n",
        })
        paths = unpack_archive(data, tmp_path / "stage")
        assert paths == [
            SourcePath("acme-widgets-abc", "README.md"),
            SourcePath("acme-widgets-abc/pkg/foo", "bar.go"),
        ]
        assert (tmp_path / "stage/acme-widgets-abc/pkg/foo/bar.go").read_text() == "package foo\n"

    def test_rejects_escaping_members(self, tmp_path):
        data = make_zip({"../evil.txt": "x"})
        with pytest.raises(ValueError):
            unpack_archive(data, tmp_path / "stage")
        assert not (tmp_path / "evil.txt").exists()


class TestDiscover:
    def test_sorted_recursive(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "z.md").write_text("z")
        (tmp_path / "a.md").write_text("a")
        files = discover_files(tmp_path)
        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["a.md", "b/z.md"]
        assert discover_source_paths(tmp_path) == [SourcePath("", "a.md"), SourcePath("b", "z.md")]

    def test_missing_dir(self, tmp_path):
        assert discover_files(tmp_path / "nope") == []

    def test_binary_file_skipped(self, tmp_path):
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\x00\x81")
        assert read_lines(path) is None
