"""
Row mapper for turning a note export document into one flat CSV row.
"""
import json
import logging
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)

# Column order is positional for downstream tooling; never derive it from input.
CSV_COLUMNS = [
    "filename",
    "color",
    "isTrashed",
    "isPinned",
    "isArchived",
    "title",
    "textContent",
    "userEditedTimestampUsec",
    "userEditedTimestampISO",
    "createdTimestampUsec",
    "createdTimestampISO",
    "textContentHtml",
    "labels",
    "annotations",
]

ANNOTATION_FIELDS = ["description", "source", "title", "url"]

USEC_PER_SECOND = 1_000_000


def _string_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ''


def _bool_field(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _usec_field(data: Dict[str, Any], key: str) -> Any:
    value = data.get(key)
    if isinstance(value, str):
        return value
    # JSON integers are accepted as well as numeric strings
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return ''


def _list_field(data: Dict[str, Any], key: str) -> Optional[List[Any]]:
    value = data.get(key)
    return value if isinstance(value, list) else None


@dataclass
class NoteRecord:
    """A note export with every optional field resolved to a concrete value."""

    color: str = ''
    is_trashed: bool = False
    is_pinned: bool = False
    is_archived: bool = False
    title: str = ''
    text_content: str = ''
    text_content_html: str = ''
    created_timestamp_usec: Any = ''
    user_edited_timestamp_usec: Any = ''
    labels: Optional[List[Any]] = None
    annotations: Optional[List[Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NoteRecord":
        """Build a record from a decoded export, defaulting missing or mistyped fields."""
        return cls(
            color=_string_field(data, "color"),
            is_trashed=_bool_field(data, "isTrashed"),
            is_pinned=_bool_field(data, "isPinned"),
            is_archived=_bool_field(data, "isArchived"),
            title=_string_field(data, "title"),
            text_content=_string_field(data, "textContent"),
            text_content_html=_string_field(data, "textContentHtml"),
            created_timestamp_usec=_usec_field(data, "createdTimestampUsec"),
            user_edited_timestamp_usec=_usec_field(data, "userEditedTimestampUsec"),
            labels=_list_field(data, "labels"),
            annotations=_list_field(data, "annotations"),
        )


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(',', ':'))


def usec_to_iso(usec: Any) -> str:
    """
    Convert a microsecond epoch timestamp to an ISO-8601 UTC string.

    Microseconds are floored to whole seconds. Anything that is not a run of
    decimal digits, or that falls outside the supported date range, gives ''.
    """
    text = str(usec) if isinstance(usec, int) and not isinstance(usec, bool) else usec
    if not isinstance(text, str) or not text.isascii() or not text.isdigit():
        return ''

    try:
        seconds = int(text) // USEC_PER_SECOND
        return datetime.fromtimestamp(seconds, tz=UTC).strftime('%Y-%m-%dT%H:%M:%SZ')
    except (OverflowError, OSError, ValueError) as e:
        logger.debug(f"Timestamp {text} out of range: {e}")
        return ''


def flatten_labels(labels: Optional[List[Any]]) -> str:
    """Serialize label names as a JSON array; missing names become null."""
    if labels is None:
        return '[]'
    names = [label.get('name') if isinstance(label, dict) else None for label in labels]
    return _to_json(names)


def flatten_annotations(annotations: Optional[List[Any]]) -> str:
    """Serialize annotations as a JSON array of objects with fixed keys."""
    if annotations is None:
        return '[]'
    flattened = []
    for annotation in annotations:
        if not isinstance(annotation, dict):
            annotation = {}
        flattened.append({
            key: annotation.get(key) if annotation.get(key) is not None else ''
            for key in ANNOTATION_FIELDS
        })
    return _to_json(flattened)


def map_note(record: NoteRecord, source_filename: str) -> Dict[str, Any]:
    """
    Map a note record to a flat output row.

    Args:
        record: Normalized note record
        source_filename: Base name of the file the note was read from

    Returns:
        Row dictionary keyed by CSV_COLUMNS, in column order
    """
    return {
        "filename": source_filename,
        "color": record.color,
        "isTrashed": record.is_trashed,
        "isPinned": record.is_pinned,
        "isArchived": record.is_archived,
        "title": record.title,
        "textContent": record.text_content,
        "userEditedTimestampUsec": record.user_edited_timestamp_usec,
        "userEditedTimestampISO": usec_to_iso(record.user_edited_timestamp_usec),
        "createdTimestampUsec": record.created_timestamp_usec,
        "createdTimestampISO": usec_to_iso(record.created_timestamp_usec),
        "textContentHtml": record.text_content_html,
        "labels": flatten_labels(record.labels),
        "annotations": flatten_annotations(record.annotations),
    }
