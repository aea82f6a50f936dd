"""Snippet module: harvest capture regions and format them for insertion."""

from snipsync.snippet.model import SourceFile, SourcePath, Snippet
from snipsync.snippet.extractor import ExtractionResult, extract_all, extract_snippets
from snipsync.snippet.formatter import format_snippet

__all__ = [
    "SourceFile",
    "SourcePath",
    "Snippet",
    "ExtractionResult",
    "extract_all",
    "extract_snippets",
    "format_snippet",
]
