"""Target module: locate insertion regions in documents and rewrite them."""

from snipsync.target.model import MarkerRegion, TargetFile
from snipsync.target.splicer import (
    SpliceResult,
    clear_file,
    clear_files,
    scan_regions,
    splice_snippet,
    splice_snippets,
)

__all__ = [
    "MarkerRegion",
    "TargetFile",
    "SpliceResult",
    "clear_file",
    "clear_files",
    "scan_regions",
    "splice_snippet",
    "splice_snippets",
]
