"""
Core archive engine for turning note export files into chunked CSV output.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional

from .chunked_writer import ChunkedWriter
from .errors import ArchiverError, ChunkWriteError, ProcessingError
from .io_utils import read_json_file
from .row_mapper import NoteRecord, map_note
from .schema_validator import DEFAULT_SCHEMA_PATH, check_note_export, load_schema

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of processing one input file: a row or an error, never both."""

    source_file: Path
    row: Optional[Dict[str, Any]] = None
    error: Optional[ArchiverError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ArchiveEngine:
    """Engine for archiving note export files into CSV chunks."""

    def __init__(self, writer: ChunkedWriter, schema_path: Path = DEFAULT_SCHEMA_PATH):
        """
        Initialize archive engine.

        Args:
            writer: Chunked writer that receives the mapped rows
            schema_path: Path to the note export schema file
        """
        self.writer = writer
        self.schema = load_schema(schema_path)

    def process_file(self, source_file: Path) -> FileResult:
        """
        Decode, check and map a single note export file.

        Args:
            source_file: Path to a note export JSON file

        Returns:
            FileResult holding the mapped row or the error that prevented it
        """
        source_file = Path(source_file)
        filename = source_file.name

        try:
            note_data = read_json_file(source_file)

            fatal_error, warnings = check_note_export(note_data, self.schema)
            if fatal_error:
                raise ProcessingError(f"Error processing {filename}: {fatal_error}")
            for warning in warnings:
                logger.warning(f"{filename}: {warning}; using default")

            record = NoteRecord.from_dict(note_data)
            row = map_note(record, filename)
        except ArchiverError as e:
            return FileResult(source_file, error=e)
        except Exception as e:
            return FileResult(source_file, error=ProcessingError(f"Error processing {filename}: {e}"))

        return FileResult(source_file, row=row)

    def archive_files(self, json_files: List[Path]) -> Dict[str, Any]:
        """
        Process files in order, feeding rows to the writer and finalizing it.

        Args:
            json_files: Ordered list of note export files

        Returns:
            Dictionary with archive statistics
        """
        stats = {
            "files_total": len(json_files),
            "files_processed": 0,
            "files_failed": 0,
            "rows_written": 0,
            "rows_dropped": 0,
            "output_files": [],
            "failed_chunks": [],
            "errors": []
        }

        logger.info(f"Processing {len(json_files)} JSON file(s)...")

        for file_path in json_files:
            logger.info(f"Processing: {Path(file_path).name}")
            result = self.process_file(file_path)

            if not result.ok:
                logger.error(str(result.error))
                stats["files_failed"] += 1
                stats["errors"].append(str(result.error))
                continue

            stats["files_processed"] += 1
            try:
                self.writer.ingest(result.row)
            except ChunkWriteError as e:
                logger.error(str(e))
                stats["errors"].append(str(e))

        try:
            self.writer.finalize()
        except ChunkWriteError as e:
            logger.error(str(e))
            stats["errors"].append(str(e))

        output_files = self.writer.written_files
        stats["rows_written"] = self.writer.rows_written
        stats["rows_dropped"] = self.writer.rows_dropped
        stats["output_files"] = [str(p) for p in output_files]
        stats["failed_chunks"] = [str(p) for p in self.writer.failed_files]

        logger.info(
            f"Completed archive: {stats['files_processed']} processed, "
            f"{stats['files_failed']} failed, {stats['rows_written']} rows in "
            f"{len(output_files)} file(s)"
        )
        if stats["failed_chunks"]:
            logger.error(
                f"{len(stats['failed_chunks'])} chunk(s) could not be written, "
                f"{stats['rows_dropped']} rows dropped"
            )
        return stats
