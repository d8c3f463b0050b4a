"""Configuration file management for spendlog."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from spendlog.domain.view import SortKey
from spendlog.errors import ValidationError

DEFAULT_CONFIG: dict[str, Any] = {
    "storage_key": "transactions",
    "currency_symbol": "$",
    "default_sort": SortKey.DATE_DESC.value,
    "log_level": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    storage_key: str
    currency_symbol: str
    default_sort: SortKey
    log_level: str


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spendlog" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Merge a configuration dictionary over the defaults.

    Args:
        config: Configuration dictionary (unknown keys are ignored).

    Returns:
        Settings with every field populated.

    Raises:
        ValidationError: If a value has the wrong type or default_sort is unknown.
    """
    merged = {**DEFAULT_CONFIG, **config}

    for key in DEFAULT_CONFIG:
        if not isinstance(merged[key], str):
            raise ValidationError(f"Config value '{key}' must be a string")

    if not merged["storage_key"].strip():
        raise ValidationError("Config value 'storage_key' must not be empty")

    try:
        default_sort = SortKey(merged["default_sort"])
    except ValueError:
        valid = ", ".join(key.value for key in SortKey)
        raise ValidationError(f"Unknown default_sort '{merged['default_sort']}' (expected one of: {valid})") from None

    return Settings(
        storage_key=merged["storage_key"],
        currency_symbol=merged["currency_symbol"],
        default_sort=default_sort,
        log_level=merged["log_level"],
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings for this run.

    Raises:
        ValidationError: If the file is not valid TOML or holds invalid values.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    except tomllib.TOMLDecodeError as e:
        raise ValidationError(f"Malformed config file: {e}") from None
    return settings_from_config(config)
