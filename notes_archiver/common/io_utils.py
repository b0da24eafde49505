"""
IO utilities for discovering and reading note export files.
"""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from .errors import ConfigError, DecodeError

logger = logging.getLogger(__name__)


def discover_json_files(resources_dir: Path, specific_file: Optional[str] = None,
                        max_files: Optional[int] = None) -> List[Path]:
    """
    Find the note export files to process.

    Args:
        resources_dir: Directory holding the exported JSON notes
        specific_file: Name of a single file inside resources_dir to process
        max_files: Optional cap on the number of discovered files

    Returns:
        Ordered list of JSON file paths
    """
    resources_path = Path(resources_dir)

    if specific_file:
        file_path = resources_path / specific_file
        if file_path.is_file() and file_path.suffix == '.json':
            return [file_path]
        raise ConfigError(
            f"File '{specific_file}' not found or not a JSON file in {resources_path}"
        )

    if not resources_path.is_dir():
        logger.warning(f"Resources directory does not exist: {resources_path}")
        return []

    json_files = sorted(p for p in resources_path.glob("*.json") if p.is_file())
    if max_files is not None:
        json_files = json_files[:max_files]

    logger.debug(f"Discovered {len(json_files)} JSON files in {resources_path}")
    return json_files


def read_json_file(file_path: Path) -> Any:
    """Read and decode one JSON document, raising DecodeError on failure."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Error parsing JSON in {Path(file_path).name}: {e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"File {Path(file_path).name} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise DecodeError(f"Error reading {Path(file_path).name}: {e}") from e
