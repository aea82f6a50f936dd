"""Snippet sync: fetches origins, harvests snippets, rewrites target docs.

The sync process:
1. Download each origin's archive and unpack it into the staging directory
   (origins run concurrently; each yields its own snippet list)
2. Scan every unpacked file for capture regions
3. Format each snippet once
4. Load every file under the target directory
5. Splice each snippet into every target file, one file at a time
6. Write back the files that changed and remove this run's unpacked archives

Preserves all content outside the insertion markers.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
import zipfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from snipsync.config import Origin, SyncConfig
from snipsync.paths import staging_dir as default_staging_dir
from snipsync.snippet.extractor import ExtractionResult, extract_all
from snipsync.snippet.formatter import format_snippet
from snipsync.snippet.model import SourceFile, SourcePath
from snipsync.source.archive import ArchiveClient, ArchiveFetchError, GitHubArchiveClient, unpack_archive
from snipsync.source.discover import discover_files, discover_source_paths, read_lines, write_lines
from snipsync.target.model import TargetFile
from snipsync.target.splicer import SpliceResult, clear_files, splice_snippets

logger = logging.getLogger(__name__)

MAX_FETCH_WORKERS = 8


@dataclass
class SyncResult:
    """Result of a sync or clear run."""

    snippets: int = 0
    unused: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)
    dry_run: bool = False

    @property
    def passed(self) -> bool:
        return not self.errors


def _source_files(origin: Origin, root: Path, paths: list[SourcePath]) -> list[SourceFile]:
    sources = []
    for sp in paths:
        lines = read_lines(root / sp.directory / sp.name)
        if lines is None:
            continue
        sources.append(SourceFile(path=sp, lines=lines, owner=origin.owner, repo=origin.repo, ref=origin.ref))
    return sources


def harvest_origin(origin: Origin, client: ArchiveClient, destination: Path) -> ExtractionResult:
    """Fetch, unpack and scan one origin.

    Raises:
        ArchiveFetchError: If the archive can't be downloaded.
        zipfile.BadZipFile: If the download isn't a zip archive.
    """
    data = client.fetch_archive(origin.owner, origin.repo, origin.ref)
    paths = unpack_archive(data, destination)
    result = extract_all(_source_files(origin, destination, paths))
    logger.info(
        "Extracted %d snippets from %d files in %s",
        len(result.snippets), result.files_scanned, origin.slug,
    )
    return result


def extract_directory(
    root: Path | str,
    owner: str = "",
    repo: str = "",
    ref: str = "",
) -> ExtractionResult:
    """Scan a local directory tree for snippets without fetching anything."""
    base = Path(root).resolve()
    origin = Origin(owner=owner, repo=repo, ref=ref)
    # Prefix the root's own name so it stands in for the archive's top folder
    paths = [
        SourcePath(directory="/".join(p for p in (base.name, sp.directory) if p), name=sp.name)
        for sp in discover_source_paths(base)
    ]
    return extract_all(_source_files(origin, base.parent, paths))


def load_targets(target_dir: Path, show_progress: bool = False) -> list[TargetFile]:
    """Read every decodable file under the target directory."""
    targets = []
    for path in tqdm(discover_files(target_dir), desc="loading targets", unit="file", disable=not show_progress):
        lines = read_lines(path)
        if lines is None:
            continue
        targets.append(TargetFile(filename=path.relative_to(target_dir).as_posix(), lines=lines))
    return targets


def write_files(
    targets: list[TargetFile],
    target_dir: Path,
    result: SyncResult,
    failed: list[str],
    dry_run: bool = False,
) -> None:
    """Persist changed targets; record every target as updated or unchanged."""
    for target in targets:
        if target.filename in failed or not target.changed:
            result.unchanged.append(target.filename)
            continue
        if not dry_run:
            write_lines(target_dir / target.filename, target.lines)
        result.updated.append(target.filename)


def _check_target(config: SyncConfig, result: SyncResult) -> bool:
    if config.target_dir.is_dir():
        return True
    logger.error("Target directory not found: %s", config.target_dir)
    result.errors.append({"path": str(config.target_dir), "line": None, "error": "target directory not found"})
    return False


def _remove_staging(run_dir: Path, staging: Path, created_staging: bool) -> None:
    shutil.rmtree(run_dir, ignore_errors=True)
    if created_staging:
        try:
            staging.rmdir()
        except OSError:
            logger.debug("Staging directory %s not empty, leaving it", staging)


def _absorb(result: SyncResult, other: ExtractionResult | SpliceResult) -> None:
    result.warnings.extend(other.warnings)
    result.errors.extend(other.errors)


def run_sync(
    config: SyncConfig,
    *,
    client: ArchiveClient | None = None,
    staging_dir: Path | str | None = None,
    dry_run: bool = False,
    keep_staging: bool = False,
    show_progress: bool = False,
) -> SyncResult:
    """Sync snippets from every configured origin into the target directory.

    Archives unpack into a fresh run folder inside the staging directory.
    Only that folder is removed afterwards, along with the staging directory
    itself when this run created it.
    """
    result = SyncResult(dry_run=dry_run)
    if not _check_target(config, result):
        return result

    owned_client = client is None
    if owned_client:
        client = GitHubArchiveClient()
    staging = Path(staging_dir) if staging_dir else default_staging_dir()
    created_staging = not staging.exists()
    staging.mkdir(parents=True, exist_ok=True)
    run_dir = Path(tempfile.mkdtemp(prefix="run-", dir=staging))

    harvested = ExtractionResult()
    workers = max(1, min(MAX_FETCH_WORKERS, len(config.origins)))
    try:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(harvest_origin, origin, client, run_dir / f"{i}-{origin.owner}-{origin.repo}")
                for i, origin in enumerate(config.origins)
            ]
            with tqdm(total=len(futures), desc="fetching origins", unit="repo", disable=not show_progress) as progress:
                # Collected in config order so output is deterministic
                for origin, future in zip(config.origins, futures):
                    try:
                        harvested.merge(future.result())
                    except (ArchiveFetchError, zipfile.BadZipFile, ValueError, OSError) as e:
                        logger.error("Failed to harvest %s: %s", origin.slug, e)
                        result.errors.append({"path": origin.slug, "line": None, "error": str(e)})
                    progress.update(1)
    finally:
        if owned_client:
            client.close()
        if keep_staging:
            logger.info("Unpacked archives kept in %s", run_dir)
        else:
            _remove_staging(run_dir, staging, created_staging)

    _absorb(result, harvested)
    snippets = harvested.snippets
    for snippet in snippets:
        format_snippet(snippet, config.features.enable_source_link, config.default_ref)
    result.snippets = len(snippets)

    targets = load_targets(config.target_dir, show_progress)
    spliced = splice_snippets(snippets, targets)
    _absorb(result, spliced)
    result.unused = spliced.unused(snippets)
    for snippet_id in result.unused:
        logger.debug("Snippet '%s' has no insertion region", snippet_id)

    write_files(targets, config.target_dir, result, spliced.failed, dry_run)
    logger.info(
        "Snippet sync complete: %d snippets, %d files updated",
        result.snippets, len(result.updated),
    )
    return result


def run_clear(
    config: SyncConfig,
    *,
    dry_run: bool = False,
    show_progress: bool = False,
) -> SyncResult:
    """Empty every insertion region under the target directory."""
    result = SyncResult(dry_run=dry_run)
    if not _check_target(config, result):
        return result
    targets = load_targets(config.target_dir, show_progress)
    cleared = clear_files(targets)
    _absorb(result, cleared)
    write_files(targets, config.target_dir, result, cleared.failed, dry_run)
    logger.info("Snippets cleared from %d files", len(result.updated))
    return result
