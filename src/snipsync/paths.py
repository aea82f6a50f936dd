"""Path resolution.

Resolves the config file and the staging directory for unpacked archives.
Uses environment variables when available, falls back to the current
working directory.

Environment variables:
    SNIPSYNC_CONFIG: config file (default: ./snipsync.yaml)
    SNIPSYNC_STAGING_DIR: unpacked archives (default: ./sync_repos)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_CONFIG_NAME = "snipsync.yaml"
_DEFAULT_STAGING_NAME = "sync_repos"


def config_path() -> Path:
    """Return the path to the config file."""
    env = os.environ.get("SNIPSYNC_CONFIG")
    if env:
        return Path(env)
    return Path.cwd() / _DEFAULT_CONFIG_NAME


def staging_dir() -> Path:
    """Return the directory archives are unpacked into."""
    env = os.environ.get("SNIPSYNC_STAGING_DIR")
    if env:
        return Path(env)
    return Path.cwd() / _DEFAULT_STAGING_NAME
