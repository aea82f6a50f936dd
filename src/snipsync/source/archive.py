"""Fetch repository archives and unpack them into a staging directory."""

from __future__ import annotations

import io
import logging
import os
import zipfile
from pathlib import Path, PurePosixPath
from typing import Protocol

import httpx

from snipsync.snippet.model import SourcePath

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"


class ArchiveFetchError(RuntimeError):
    """The archive for an origin could not be downloaded."""


class ArchiveClient(Protocol):
    def fetch_archive(self, owner: str, repo: str, ref: str) -> bytes: ...


class GitHubArchiveClient:
    """Download zipball archives from the GitHub REST API.

    A token is optional for public repositories; it defaults to
    ``$GITHUB_TOKEN``.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = GITHUB_API,
        client: httpx.Client | None = None,
        timeout: float = 60.0,
    ) -> None:
        self.token = token if token is not None else os.environ.get("GITHUB_TOKEN")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client()

    def archive_url(self, owner: str, repo: str, ref: str = "") -> str:
        url = f"{self.base_url}/repos/{owner}/{repo}/zipball"
        if ref:
            url += f"/{ref}"
        return url

    def fetch_archive(self, owner: str, repo: str, ref: str = "") -> bytes:
        url = self.archive_url(owner, repo, ref)
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        logger.debug("Downloading archive %s/%s (ref=%s) from %s", owner, repo, ref or "default", url)
        try:
            response = self._client.get(
                url, headers=headers, timeout=self.timeout, follow_redirects=True,
            )
        except httpx.HTTPError as e:
            raise ArchiveFetchError(f"Failed to download {owner}/{repo}: {e}") from e

        if response.status_code != 200:
            raise ArchiveFetchError(
                f"GitHub returned {response.status_code} for {owner}/{repo}"
                f"{'@' + ref if ref else ''}: {response.text[:200]}"
            )
        return response.content

    def close(self) -> None:
        self._client.close()


def unpack_archive(data: bytes, destination: Path | str) -> list[SourcePath]:
    """Extract a zip archive and list the files it contained.

    Args:
        data: Zip archive bytes.
        destination: Directory to extract into; created if missing.

    Returns:
        SourcePaths relative to ``destination``, in archive order.

    Raises:
        ValueError: If a member would land outside ``destination``.
        zipfile.BadZipFile: If ``data`` is not a zip archive.
    """
    dest = Path(destination)
    dest.mkdir(parents=True, exist_ok=True)
    root = dest.resolve()

    files: list[SourcePath] = []
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        for info in archive.infolist():
            member = PurePosixPath(info.filename)
            if member.is_absolute() or ".." in member.parts:
                raise ValueError(f"Refusing to extract unsafe archive member: {info.filename}")
            if not (root / member).resolve().is_relative_to(root):
                raise ValueError(f"Refusing to extract unsafe archive member: {info.filename}")
            archive.extract(info, dest)
            if info.is_dir():
                continue
            directory = str(member.parent) if str(member.parent) != "." else ""
            files.append(SourcePath(directory=directory, name=member.name))

    logger.debug("Unpacked %d files into %s", len(files), dest)
    return files
