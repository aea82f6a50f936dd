"""Load and validate the sync configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# Ref used in source links when an origin doesn't pin one
DEFAULT_REF = "master"


@dataclass
class Origin:
    """A repository snippets are harvested from."""

    owner: str
    repo: str
    ref: str = ""

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class Features:
    enable_source_link: bool = False


@dataclass
class SyncConfig:
    """Parsed configuration.

    ``target`` is resolved against ``root``, the directory holding the
    config file.
    """

    origins: list[Origin]
    target: str
    features: Features = field(default_factory=Features)
    default_ref: str = DEFAULT_REF
    root: Path = field(default_factory=Path.cwd)

    @property
    def target_dir(self) -> Path:
        return self.root / self.target


def parse_config(data: object, source: str = "<config>", root: Path | None = None) -> SyncConfig:
    """Build a SyncConfig from already-parsed YAML data.

    Raises:
        ValueError: If a required key is missing or has the wrong type.
    """
    if not isinstance(data, dict):
        raise ValueError(f"config at {source} is not a YAML mapping")

    raw_origins = data.get("origins")
    if not isinstance(raw_origins, list) or not raw_origins:
        raise ValueError(f"config at {source}: 'origins' must be a non-empty list")

    origins = []
    for i, entry in enumerate(raw_origins):
        if not isinstance(entry, dict):
            raise ValueError(f"config at {source}: origins[{i}] is not a mapping")
        for key in ("owner", "repo"):
            if not isinstance(entry.get(key), str) or not entry[key]:
                raise ValueError(f"config at {source}: origins[{i}] missing '{key}'")
        ref = entry.get("ref") or ""
        origins.append(Origin(owner=entry["owner"], repo=entry["repo"], ref=str(ref)))

    target = data.get("target")
    if not isinstance(target, str) or not target:
        raise ValueError(f"config at {source}: 'target' must be a directory path")

    raw_features = data.get("features") or {}
    if not isinstance(raw_features, dict):
        raise ValueError(f"config at {source}: 'features' is not a mapping")
    link = raw_features.get("enable_source_link", False)
    if not isinstance(link, bool):
        raise ValueError(f"config at {source}: 'features.enable_source_link' must be true or false")
    features = Features(enable_source_link=link)

    default_ref = data.get("default_ref") or DEFAULT_REF

    return SyncConfig(
        origins=origins,
        target=target,
        features=features,
        default_ref=str(default_ref),
        root=root if root is not None else Path.cwd(),
    )


def load_config(path: Path | str) -> SyncConfig:
    """Read a YAML config file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the content doesn't describe a valid config.
    """
    config_path = Path(path)
    with open(config_path) as f:
        data = yaml.safe_load(f)
    return parse_config(data, str(config_path), root=config_path.resolve().parent)
