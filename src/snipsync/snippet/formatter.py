"""Wrap captured lines in a fenced code block, optionally with a source link."""

from __future__ import annotations

from snipsync.config import DEFAULT_REF
from snipsync.grammar import CODE_FENCE, fence_open
from snipsync.snippet.model import Snippet

GITHUB_URL = "https://github.com"


def build_path(snippet: Snippet) -> str:
    """Path of the snippet's file relative to its repository root."""
    return snippet.source_path.repo_relative


def build_url(snippet: Snippet, default_ref: str = DEFAULT_REF) -> str:
    """Blob URL of the snippet's file; an empty ref falls back to ``default_ref``."""
    ref = snippet.ref or default_ref
    return "/".join([GITHUB_URL, snippet.owner, snippet.repo, "blob", ref, build_path(snippet)])


def format_source_link(snippet: Snippet, default_ref: str = DEFAULT_REF) -> str:
    return f"[{build_path(snippet)}]({build_url(snippet, default_ref)})"


def format_snippet(
    snippet: Snippet,
    include_source_link: bool = False,
    default_ref: str = DEFAULT_REF,
) -> Snippet:
    """Fence a snippet's lines in place and return it.

    Result layout: optional source link, opening fence with the extension,
    the captured lines byte-for-byte, closing fence. Formatting twice is an
    error since the fences would nest.
    """
    if snippet.formatted:
        raise ValueError(f"snippet '{snippet.id}' is already formatted")

    header = [fence_open(snippet.extension)]
    if include_source_link:
        header.insert(0, format_source_link(snippet, default_ref))
    snippet.lines[:0] = header
    snippet.lines.append(CODE_FENCE)
    snippet.formatted = True
    return snippet
