"""Configuration loading for PriceMix.

Settings live in a TOML file (``~/.config/pricemix/config.toml`` by
default). A missing file is not an error; every setting has a default.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "pricemix"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "pricemix.db"

# Environment variable that points at an alternative config file
CONFIG_ENV_VAR = "PRICEMIX_CONFIG"


class SymbolConfig(BaseModel):
    """Separators used in symbol expressions such as ``SPY:2,QQQ:1``."""

    tickers_separator: str = Field(default=",", min_length=1)
    weight_separator: str = Field(default=":", min_length=1)

    model_config = {"frozen": True}


class CacheConfig(BaseModel):
    """Local cache settings."""

    enabled: bool = Field(default=True, description="Use the local cache")
    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite file")

    model_config = {"frozen": True}


class PriceMixConfig(BaseModel):
    """Top level configuration."""

    symbols: SymbolConfig = Field(default_factory=SymbolConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    model_config = {"frozen": True}


def resolve_config_path(path: Optional[Path] = None) -> Path:
    """Pick the config file: explicit path, then env var, then default."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> PriceMixConfig:
    """Load configuration from a TOML file.

    Args:
        path: Optional explicit config file path.

    Returns:
        Parsed configuration, defaults when the file does not exist.

    Raises:
        ValueError: If the file cannot be parsed or holds invalid values.
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        return PriceMixConfig()

    try:
        raw = toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ValueError(f"Failed to read config {config_path}: {e}")

    cache_section = raw.get("cache", {})
    if "db_path" in cache_section:
        cache_section["db_path"] = Path(str(cache_section["db_path"])).expanduser()

    try:
        return PriceMixConfig.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid config {config_path}: {e}")
