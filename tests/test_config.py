"""Tests for config loading and path resolution."""

from pathlib import Path

import pytest
import yaml

from snipsync.config import DEFAULT_REF, load_config, parse_config
from snipsync.paths import config_path, staging_dir


class TestLoadConfig:
    def test_full_config(self, tmp_path):
        path = tmp_path / "snipsync.yaml"
        path.write_text(
            "origins:\n"
            "  - owner: acme\n"
            "    repo: widgets\n"
            "    ref: v1.2.0\n"
            "  - owner: acme\n"
            "    repo: gadgets\n"
            "target: docs\n"
            "features:\n"
            "  enable_source_link: true\n"
        )
        config = load_config(path)
        assert [o.slug for o in config.origins] == ["acme/widgets", "acme/gadgets"]
        assert config.origins[0].ref == "v1.2.0"
        assert config.origins[1].ref == ""
        assert config.features.enable_source_link is True
        assert config.default_ref == DEFAULT_REF == "master"
        assert config.target_dir == tmp_path.resolve() / "docs"

    def test_features_optional(self):
        config = parse_config({"origins": [{"owner": "a", "repo": "b"}], "target": "docs"})
        assert config.features.enable_source_link is False

    def test_default_ref_override(self):
        config = parse_config({
            "origins": [{"owner": "a", "repo": "b"}],
            "target": "docs",
            "default_ref": "main",
        })
        assert config.default_ref == "main"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("origins: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(path)

    @pytest.mark.parametrize("data, fragment", [
        ([], "not a YAML mapping"),
        ({"target": "docs"}, "'origins'"),
        ({"origins": [], "target": "docs"}, "'origins'"),
        ({"origins": ["acme/widgets"], "target": "docs"}, "origins[0]"),
        ({"origins": [{"owner": "acme"}], "target": "docs"}, "missing 'repo'"),
        ({"origins": [{"owner": "a", "repo": "b"}]}, "'target'"),
        ({"origins": [{"owner": "a", "repo": "b"}], "target": "d", "features": [1]}, "'features'"),
        ({"origins": [{"owner": "a", "repo": "b"}], "target": "d",
          "features": {"enable_source_link": "false"}}, "enable_source_link"),
    ])
    def test_invalid(self, data, fragment):
        with pytest.raises(ValueError) as exc_info:
            parse_config(data, "cfg.yaml")
        assert fragment in str(exc_info.value)


class TestPaths:
    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SNIPSYNC_CONFIG", str(tmp_path / "c.yaml"))
        monkeypatch.setenv("SNIPSYNC_STAGING_DIR", str(tmp_path / "stage"))
        assert config_path() == tmp_path / "c.yaml"
        assert staging_dir() == tmp_path / "stage"

    def test_defaults_in_cwd(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SNIPSYNC_CONFIG", raising=False)
        monkeypatch.delenv("SNIPSYNC_STAGING_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert config_path() == Path.cwd() / "snipsync.yaml"
        assert staging_dir() == Path.cwd() / "sync_repos"
