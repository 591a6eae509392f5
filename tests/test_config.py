"""Tests for configuration loading.

**Feature: price-mix**
"""

from pathlib import Path

import pytest

from pricemix.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    PriceMixConfig,
    load_config,
    resolve_config_path,
)


class TestLoadConfig:
    """Config files are optional and validated when present."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "absent.toml")

        assert config == PriceMixConfig()
        assert config.symbols.tickers_separator == ","
        assert config.symbols.weight_separator == ":"
        assert config.cache.enabled is True

    def test_values_are_read(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[symbols]\n'
            'tickers_separator = "|"\n'
            'weight_separator = "="\n'
            '\n'
            '[cache]\n'
            'enabled = false\n'
            f'db_path = "{tmp_path / "prices.db"}"\n'
        )

        config = load_config(path)

        assert config.symbols.tickers_separator == "|"
        assert config.symbols.weight_separator == "="
        assert config.cache.enabled is False
        assert config.cache.db_path == tmp_path / "prices.db"

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[cache]\nenabled = false\n')

        config = load_config(path)

        assert config.cache.enabled is False
        assert config.symbols.tickers_separator == ","

    def test_invalid_toml_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[symbols\n")

        with pytest.raises(ValueError, match="Failed to read config"):
            load_config(path)

    def test_invalid_value_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[symbols]\ntickers_separator = ""\n')

        with pytest.raises(ValueError, match="Invalid config"):
            load_config(path)


class TestResolveConfigPath:
    """Explicit path beats the environment, which beats the default."""

    def test_explicit_path(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))

        assert resolve_config_path(tmp_path / "cli.toml") == tmp_path / "cli.toml"

    def test_env_path(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))

        assert resolve_config_path() == tmp_path / "env.toml"

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

        assert resolve_config_path() == DEFAULT_CONFIG_PATH
