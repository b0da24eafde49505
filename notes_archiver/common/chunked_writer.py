"""
Chunked CSV writer that splits the row stream across numbered output files.
"""
import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Any, List

from .errors import ChunkWriteError, ConfigError
from .row_mapper import CSV_COLUMNS

logger = logging.getLogger(__name__)


def chunk_filename(output_path: Path, chunk_index: int) -> Path:
    """Return the path for a chunk: the base name for chunk 1, <stem>_<n><suffix> after."""
    output_path = Path(output_path)
    if chunk_index == 1:
        return output_path
    return output_path.with_name(f"{output_path.stem}_{chunk_index}{output_path.suffix}")


def _serialize_value(value: Any) -> Any:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return value


class ChunkedWriter:
    """Buffers rows and writes them out in chunks of at most row_limit rows."""

    def __init__(self, output_path: Path, row_limit: int = 1000):
        """
        Initialize chunked writer.

        Args:
            output_path: Base output CSV path, used as-is for the first chunk
            row_limit: Maximum number of rows per chunk file
        """
        if isinstance(row_limit, bool) or not isinstance(row_limit, int) or row_limit < 1:
            raise ConfigError(f"row_limit must be a positive integer, got {row_limit!r}")

        self.output_path = Path(output_path)
        self.row_limit = row_limit
        self.chunk_index = 1
        self.buffer: List[Dict[str, Any]] = []
        self.written_files: List[Path] = []
        self.failed_files: List[Path] = []
        self.rows_written = 0
        self.rows_dropped = 0

    def ingest(self, row: Dict[str, Any]) -> None:
        """Append a row, flushing the chunk once it reaches the row limit."""
        self.buffer.append(row)
        if len(self.buffer) >= self.row_limit:
            self._flush()

    def finalize(self) -> List[Path]:
        """Flush any remaining rows and return every chunk file written."""
        if self.buffer:
            self._flush()
        return list(self.written_files)

    def _flush(self) -> None:
        target = chunk_filename(self.output_path, self.chunk_index)
        try:
            write_csv_atomic(self.buffer, target)
        except OSError as e:
            # The chunk is dropped so later chunks keep their numbering
            dropped = len(self.buffer)
            self.failed_files.append(target)
            self.rows_dropped += dropped
            self.chunk_index += 1
            self.buffer = []
            raise ChunkWriteError(f"Error writing chunk {target} ({dropped} rows dropped): {e}") from e

        logger.info(f"Wrote {len(self.buffer)} rows to {target}")

        self.written_files.append(target)
        self.rows_written += len(self.buffer)
        self.chunk_index += 1
        self.buffer = []


def write_csv_atomic(rows: List[Dict[str, Any]], output_path: Path) -> None:
    """
    Write rows as a complete CSV file.

    The rows go to a temporary file beside the target, which is renamed into
    place only after it has been fully written and closed.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
    )
    try:
        with os.fdopen(fd, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(CSV_COLUMNS)
            for row in rows:
                writer.writerow([_serialize_value(row[column]) for column in CSV_COLUMNS])
        os.replace(tmp_name, output_path)
    except Exception as e:
        logger.error(f"Error writing to {output_path}: {e}")
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
