"""
Configuration loading for the archiver.
"""
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("configs/archiver.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "resources_dir": "resources",
    "output_file": "notes_archive.csv",
    "row_limit": 1000,
    "max_files": None,
    "file": None,
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load archiver configuration, merging a YAML file over the defaults.

    An explicitly given path must exist. Without one, the default path is
    read only if it is present.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Configuration dictionary
    """
    config = dict(DEFAULT_CONFIG)

    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return config
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file does not exist: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file {config_path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    unknown = sorted(set(loaded) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    config.update(loaded)
    logger.debug(f"Loaded config from {config_path}")
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Check limits before any input is touched."""
    row_limit = config.get("row_limit")
    if isinstance(row_limit, bool) or not isinstance(row_limit, int) or row_limit < 1:
        raise ConfigError(f"row_limit must be a positive integer, got {row_limit!r}")

    max_files = config.get("max_files")
    if max_files is not None:
        if isinstance(max_files, bool) or not isinstance(max_files, int) or max_files < 1:
            raise ConfigError(f"max_files must be a positive integer, got {max_files!r}")

    for key in ("output_file", "resources_dir"):
        value = config.get(key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{key} must be a non-empty string, got {value!r}")

    specific_file = config.get("file")
    if specific_file is not None and not isinstance(specific_file, str):
        raise ConfigError(f"file must be a string, got {specific_file!r}")
