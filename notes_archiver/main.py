"""
Command-line entry point for archiving note exports to CSV.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from notes_archiver.common.archive_engine import ArchiveEngine
from notes_archiver.common.chunked_writer import ChunkedWriter
from notes_archiver.common.config import load_config, validate_config
from notes_archiver.common.errors import ConfigError
from notes_archiver.common.io_utils import discover_json_files


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert note export JSON files into CSV archives")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--config", "-c", help="Path to YAML config file (default: configs/archiver.yaml if present)")
    parser.add_argument("--file", "-f", help="Process specific JSON file from resources directory")
    parser.add_argument("--output", "-o", help="Output CSV filename (default: notes_archive.csv)")
    parser.add_argument("--row-limit", "-n", type=int, help="Maximum rows per CSV file (default: 1000)")
    parser.add_argument("--max-files", "-m", type=int, help="Maximum number of JSON files to process")
    parser.add_argument("--resources-dir", "-r", help="Directory containing note export JSON files (default: resources)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(Path(args.config) if args.config else None)

        overrides = {
            "file": args.file,
            "output_file": args.output,
            "row_limit": args.row_limit,
            "max_files": args.max_files,
            "resources_dir": args.resources_dir,
        }
        config.update({key: value for key, value in overrides.items() if value is not None})
        validate_config(config)

        json_files = discover_json_files(
            Path(config["resources_dir"]), config["file"], config["max_files"]
        )
        writer = ChunkedWriter(Path(config["output_file"]), config["row_limit"])
    except ConfigError as e:
        logging.error(f"Error: {e}")
        return 1

    if not json_files:
        logging.info("No JSON files found to process.")
        return 0

    engine = ArchiveEngine(writer)
    stats = engine.archive_files(json_files)

    if not stats["output_files"] and not stats["failed_chunks"]:
        logging.warning("No rows were produced; no CSV file written")

    for output_file in stats["output_files"]:
        logging.info(f"CSV file created: {output_file}")

    if stats["errors"]:
        logging.warning(f"Errors: {len(stats['errors'])}")
        for error in stats["errors"]:
            logging.debug(error)

    if stats["failed_chunks"]:
        logging.error(f"CSV file(s) not written: {', '.join(stats['failed_chunks'])}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
