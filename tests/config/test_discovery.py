"""Tests for config discovery and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from summon.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, load_config
from summon.config.models import SummonConfig


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[search]\nmax_depth = 4\n")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path) == config_file

    def test_env_var_pointing_nowhere(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_loads_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text(
            "[search]\ndetect_cycles = false\nmax_depth = 8\n"
            "[execution]\ndeep_copy_facts = true\n"
            '[spellbook]\nmodules = ["books.travel"]\nplugins = false\n'
        )
        cfg = load_config(config_file)
        assert cfg.search.detect_cycles is False
        assert cfg.search.max_depth == 8
        assert cfg.search.cache_plans is False
        assert cfg.execution.deep_copy_facts is True
        assert cfg.spellbook.modules == ["books.travel"]
        assert cfg.spellbook.plugins is False

    def test_discovers_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[search]\ncache_plans = true\n")
        assert load_config(cwd=tmp_path).search.cache_plans is True

    def test_defaults_when_missing(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path) == SummonConfig()

    def test_empty_file_is_valid(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        cfg = load_config(config_file)
        assert cfg.search.detect_cycles is True
        assert cfg.search.max_depth is None
        assert cfg.spellbook.modules == []

    def test_negative_depth_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[search]\nmax_depth = -1\n")
        with pytest.raises(ValidationError):
            load_config(config_file)

    def test_models_are_frozen(self) -> None:
        cfg = SummonConfig()
        with pytest.raises(ValidationError):
            cfg.search.max_depth = 3  # type: ignore[misc]
