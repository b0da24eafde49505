"""
Convert a directory of note-export JSON documents into chunked CSV archives.
"""

__version__ = "1.0.0"
