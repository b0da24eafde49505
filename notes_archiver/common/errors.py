"""
Exceptions raised while archiving note exports.
"""


class ArchiverError(Exception):
    """Base class for archiver errors."""


class DecodeError(ArchiverError):
    """An input file could not be read or is not valid JSON."""


class ProcessingError(ArchiverError):
    """An input file was decoded but could not be turned into a row."""


class ConfigError(ArchiverError):
    """Invalid configuration; the run stops before any output is written."""


class ChunkWriteError(ArchiverError):
    """A chunk could not be written; its rows are dropped and the run goes on."""
