"""
Schema checks for decoded note export documents.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Tuple, Optional

import jsonschema

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "note_export.schema.json"


def load_schema(schema_path: Path = DEFAULT_SCHEMA_PATH) -> Dict[str, Any]:
    """Load JSON schema from file."""
    try:
        with open(schema_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, FileNotFoundError) as e:
        logger.error(f"Failed to load schema from {schema_path}: {e}")
        raise


def _format_error(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def check_note_export(note_data: Any, schema: Dict[str, Any]) -> Tuple[Optional[str], List[str]]:
    """
    Validate a decoded note export against the schema.

    Only a violation at the document root (e.g. the document is a list rather
    than an object) is fatal. Field-level mismatches are reported as warnings;
    the row mapper falls back to defaults for those fields.

    Returns:
        Tuple of (fatal_error, field_warnings)
    """
    validator_cls = jsonschema.validators.validator_for(schema)
    validator = validator_cls(schema)

    fatal_error = None
    warnings = []
    for error in sorted(validator.iter_errors(note_data), key=lambda e: list(map(str, e.absolute_path))):
        if not error.absolute_path:
            fatal_error = _format_error(error)
        else:
            warnings.append(_format_error(error))

    return fatal_error, warnings
