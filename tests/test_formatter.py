"""Tests for snippet formatting."""

import pytest

from snipsync.snippet.formatter import build_path, build_url, format_snippet
from snipsync.snippet.model import SourcePath, Snippet


def _snippet(ref="", directory="/pkg/foo", name="bar.go"):
    return Snippet(
        id="go-sample",
        extension="go",
        owner="acme",
        repo="widgets",
        ref=ref,
        source_path=SourcePath(directory=directory, name=name),
        lines=["a", "b"],
    )


class TestFormatSnippet:
    def test_fences_without_link(self):
        snippet = format_snippet(_snippet(), include_source_link=False)
        assert snippet.lines == ["```go", "a", "b", "```"]

    def test_source_link_first(self):
        snippet = format_snippet(_snippet(), include_source_link=True)
        assert snippet.lines[0] == (
            "[pkg/foo/bar.go](https://github.com/acme/widgets/blob/master/pkg/foo/bar.go)"
        )
        assert snippet.lines[1:] == ["```go", "a", "b", "```"]

    def test_ref_used_when_set(self):
        snippet = format_snippet(_snippet(ref="v1.2.0"), include_source_link=True)
        assert "/blob/v1.2.0/pkg/foo/bar.go)" in snippet.lines[0]

    def test_configured_default_ref(self):
        snippet = format_snippet(_snippet(), include_source_link=True, default_ref="main")
        assert "/blob/main/" in snippet.lines[0]

    def test_empty_body(self):
        snippet = _snippet()
        snippet.lines = []
        assert format_snippet(snippet).lines == ["```go", "```"]

    def test_formatting_twice_rejected(self):
        snippet = format_snippet(_snippet())
        with pytest.raises(ValueError):
            format_snippet(snippet)


class TestPaths:
    def test_archive_top_folder_dropped(self):
        snippet = _snippet(directory="acme-widgets-abc123/src/lib", name="util.ts")
        assert build_path(snippet) == "src/lib/util.ts"

    def test_file_at_repo_root(self):
        snippet = _snippet(directory="acme-widgets-abc123", name="main.go")
        assert build_path(snippet) == "main.go"
        assert build_url(snippet) == "https://github.com/acme/widgets/blob/master/main.go"
