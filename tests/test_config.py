"""Unit tests for Config (skel.config).

Tests cover:
- default_config_path lookup order
- Config validation (skeleton vs skeleton_file, name fallback, timeout)
- Derived paths (config_dir, project_root)
- from_env overrides
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from skel.config import Config, default_config_path


# ---------------------------------------------------------------------------
# default_config_path
# ---------------------------------------------------------------------------


class TestDefaultConfigPath:
    @pytest.mark.unit
    def test_explicit_env_var_wins(self):
        env = {"SKEL_CONFIG": "/etc/skel.toml", "XDG_CONFIG_HOME": "/xdg", "HOME": "/home/me"}
        assert default_config_path(env) == Path("/etc/skel.toml")

    @pytest.mark.unit
    def test_xdg_config_home(self):
        env = {"XDG_CONFIG_HOME": "/xdg", "HOME": "/home/me"}
        assert default_config_path(env) == Path("/xdg/skel/config.toml")

    @pytest.mark.unit
    def test_home_fallback(self):
        assert default_config_path({"HOME": "/home/me"}) == Path("/home/me/.config/skel/config.toml")

    @pytest.mark.unit
    def test_empty_values_ignored(self):
        env = {"SKEL_CONFIG": "", "XDG_CONFIG_HOME": "", "HOME": "/home/me"}
        assert default_config_path(env) == Path("/home/me/.config/skel/config.toml")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config(config_path=Path("/c/config.toml"), skeleton="rs")
        assert config.name == "rs"
        assert config.dry_run is False
        assert config.run_build is True
        assert config.build_first is False
        assert config.show_build_output is False
        assert config.make_templates is True
        assert config.build_timeout == 600

    @pytest.mark.unit
    def test_requires_skeleton_or_file(self):
        with pytest.raises(ValidationError):
            Config(config_path=Path("/c/config.toml"), name="demo")

    @pytest.mark.unit
    def test_skeleton_file_requires_name(self):
        with pytest.raises(ValidationError):
            Config(config_path=Path("/c/config.toml"), skeleton_file=Path("s.toml"))

    @pytest.mark.unit
    def test_skeleton_file_with_name(self):
        config = Config(
            config_path=Path("/c/config.toml"), skeleton_file=Path("s.toml"), name="demo"
        )
        assert config.skeleton is None
        assert config.name == "demo"

    @pytest.mark.unit
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(config_path=Path("/c/config.toml"), skeleton="rs", build_timeout=0)

    @pytest.mark.unit
    def test_config_dir(self):
        config = Config(config_path=Path("/c/skel/config.toml"), skeleton="rs")
        assert config.config_dir == Path("/c/skel")

    @pytest.mark.unit
    def test_project_root_with_parent_dir(self, tmp_path: Path):
        config = Config(
            config_path=Path("/c/config.toml"), skeleton="rs", name="demo", parent_dir=tmp_path
        )
        assert config.project_root == tmp_path / "demo"

    @pytest.mark.unit
    def test_project_root_defaults_to_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = Config(config_path=Path("/c/config.toml"), skeleton="rs", name="demo")
        assert config.project_root == Path.cwd() / "demo"
        assert config.project_root.is_absolute()


class TestFromEnv:
    @pytest.mark.unit
    def test_uses_environment_for_config_path(self):
        config = Config.from_env({"XDG_CONFIG_HOME": "/xdg"}, skeleton="rs")
        assert config.config_path == Path("/xdg/skel/config.toml")

    @pytest.mark.unit
    def test_explicit_config_path_wins(self):
        config = Config.from_env(
            {"XDG_CONFIG_HOME": "/xdg"}, config_path=Path("/mine.toml"), skeleton="rs"
        )
        assert config.config_path == Path("/mine.toml")

    @pytest.mark.unit
    def test_none_overrides_ignored(self):
        config = Config.from_env(
            {"HOME": "/home/me"}, config_path=None, skeleton="rs", name=None, parent_dir=None
        )
        assert config.name == "rs"
        assert config.parent_dir is None
