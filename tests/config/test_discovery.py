"""Tests for config and wallet discovery."""

from pathlib import Path

import pytest

from nexusctl.config.discovery import default_wallet_path, expand_tilde, find_config


class TestFindConfig:
    def test_explicit_path(self, tmp_path: Path) -> None:
        conf = tmp_path / "my.toml"
        conf.write_text("")
        assert find_config(conf) == conf

    def test_explicit_missing(self, tmp_path: Path) -> None:
        assert find_config(tmp_path / "missing.toml") is None

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        conf = tmp_path / "env.toml"
        conf.write_text("")
        monkeypatch.setenv("NEXUSCTL_CONFIG", str(conf))
        assert find_config() == conf

    def test_explicit_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_conf = tmp_path / "env.toml"
        env_conf.write_text("")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("")
        monkeypatch.setenv("NEXUSCTL_CONFIG", str(env_conf))
        assert find_config(explicit) == explicit

    def test_default_location(self, _isolated_home: Path) -> None:
        assert find_config() is None
        conf = _isolated_home / ".nexus" / "conf.toml"
        conf.parent.mkdir()
        conf.write_text("")
        assert find_config() == conf


class TestWalletPath:
    def test_default(self, _isolated_home: Path) -> None:
        assert default_wallet_path() == _isolated_home / ".sui" / "sui_config" / "client.yaml"

    def test_sui_config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUI_CONFIG_DIR", str(tmp_path))
        assert default_wallet_path() == tmp_path / "client.yaml"


class TestExpandTilde:
    def test_expands_home(self, _isolated_home: Path) -> None:
        assert expand_tilde("~/x") == _isolated_home / "x"

    def test_absolute_unchanged(self, tmp_path: Path) -> None:
        assert expand_tilde(tmp_path) == tmp_path
