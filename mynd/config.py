"""
FILE: mynd/config.py
PURPOSE: Per-user paths and the config.toml settings file
EXPORTS:
  - MyndConfig (dataclass)
  - CONFIG_KEYS: settable keys
  - get_mynd_home() -> Path
  - get_config_path() -> Path
  - get_logs_path() -> Path
  - get_data_path(config) -> Path
  - load_config(path) -> MyndConfig
  - get_config_value(key, path) -> str
  - set_config_value(key, value, path) -> str
DEPENDENCIES:
  - tomllib (stdlib, reading)
  - tomlkit (writing, keeps comments and ordering of hand-edited files)
  - mynd.core.constants, mynd.core.exceptions
NOTES:
  - Everything lives under ~/.mynd, or $MYND_HOME when set
  - A missing config file means defaults
  - Values are validated on load and on set (ValidationError)
  - An undecodable config file raises StorageError
  - data_file is stored as an absolute path
"""

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional

import tomlkit
from tomlkit.exceptions import ParseError as TOMLKitParseError

from .core.constants import (
    HOME_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    CONFIG_FILE_NAME,
    LOGS_DIR_NAME,
    DATA_FILE_NAMES,
    SAVE_FILE_FORMATS,
    DEFAULT_SAVE_FILE_FORMAT,
    LOG_LEVELS,
    DEFAULT_LOG_LEVEL,
)
from .core.exceptions import StorageError, ValidationError


@dataclass
class MyndConfig:
    """User settings from config.toml."""

    save_file_format: str = DEFAULT_SAVE_FILE_FORMAT
    data_file: str = ""
    log_level: str = DEFAULT_LOG_LEVEL

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


CONFIG_KEYS = tuple(f.name for f in fields(MyndConfig))


# --- Paths ---


def get_mynd_home() -> Path:
    """
    Get the base directory for all mynd data.

    Resolution order:
    1. MYND_HOME environment variable (if set)
    2. ~/.mynd
    """
    if env_home := os.environ.get(HOME_ENV_VAR):
        return Path(env_home).expanduser()
    return Path.home() / ".mynd"


def get_config_path() -> Path:
    return get_mynd_home() / CONFIG_FILE_NAME


def get_logs_path() -> Path:
    return get_mynd_home() / LOGS_DIR_NAME


def get_data_path(config: MyndConfig) -> Path:
    """Data file for the configured save format, or the data_file override."""
    if config.data_file:
        return Path(config.data_file).expanduser()
    return get_mynd_home() / DATA_FILE_NAMES[config.save_file_format]


# --- Validation ---


def _check_key(key: str) -> None:
    if key not in CONFIG_KEYS:
        raise ValidationError(
            f"Unknown config key '{key}'. Must be one of: {', '.join(CONFIG_KEYS)}"
        )


def normalize_value(key: str, value) -> str:
    """
    Validate and normalize a single config value.

    Args:
        key: One of CONFIG_KEYS
        value: Raw value (from TOML or the command line)

    Returns:
        Normalized string value

    Raises:
        ValidationError: If the key is unknown or the value is invalid
    """
    _check_key(key)
    if not isinstance(value, str):
        raise ValidationError(f"Config value for '{key}' must be a string")

    value = value.strip()

    if key == "save_file_format":
        value = value.lower()
        if value not in SAVE_FILE_FORMATS:
            raise ValidationError(
                f"Invalid save_file_format '{value}'. "
                f"Must be one of: {', '.join(SAVE_FILE_FORMATS)}"
            )
    elif key == "data_file" and value:
        # Stored absolute so every run finds the same file
        value = str(Path(value).expanduser().resolve())
    elif key == "log_level":
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log_level '{value}'. Must be one of: {', '.join(LOG_LEVELS)}"
            )

    return value


# --- Loading ---


def load_config(path: Optional[Path] = None) -> MyndConfig:
    """
    Load settings from config.toml.

    Args:
        path: Config file (defaults to get_config_path())

    Returns:
        MyndConfig with defaults for anything not set

    Raises:
        StorageError: If the file exists but isn't valid TOML
        ValidationError: If a known key has an invalid value
    """
    path = path or get_config_path()
    config = MyndConfig()

    if path.exists():
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise StorageError(f"Could not read config {path}: {e}", path) from e

        for key in CONFIG_KEYS:
            if key in data:
                setattr(config, key, normalize_value(key, data[key]))

    # Environment wins over the file for log level
    if env_level := os.environ.get(LOG_LEVEL_ENV_VAR):
        config.log_level = normalize_value("log_level", env_level)

    return config


def get_config_value(key: str, path: Optional[Path] = None) -> str:
    """Current value of a config key (defaults included)."""
    _check_key(key)
    return getattr(load_config(path), key)


def set_config_value(key: str, value: str, path: Optional[Path] = None) -> str:
    """
    Set a config key in config.toml.

    Args:
        key: One of CONFIG_KEYS
        value: New value (empty string clears data_file)
        path: Config file (defaults to get_config_path())

    Returns:
        The normalized value that was stored

    Raises:
        ValidationError: If the key or value is invalid
        StorageError: If the config file can't be read or written
    """
    value = normalize_value(key, value)
    path = path or get_config_path()

    try:
        doc = tomlkit.parse(path.read_text()) if path.exists() else tomlkit.document()
    except (OSError, TOMLKitParseError) as e:
        raise StorageError(f"Could not read config {path}: {e}", path) from e

    if key == "data_file" and not value:
        doc.pop(key, None)
    else:
        doc[key] = value

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tomlkit.dumps(doc))
    except OSError as e:
        raise StorageError(f"Could not write config {path}: {e}", path) from e

    return value
