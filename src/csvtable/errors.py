"""
Error types for csvtable.

File operations on the parser do not raise these: they return None/False and
keep the exception on ``CsvParser.last_error``. Only the index-checked
accessors (``row[i]``, ``table[i]``) raise.
"""

from __future__ import annotations


class CsvTableError(Exception):
    """Base class for all csvtable errors."""


class FileOpenError(CsvTableError):
    """A source or destination file could not be opened."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Couldn't open {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class StreamWriteError(CsvTableError):
    """A write or close failed after the output file was opened."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Write to {path} failed"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class IndexOutOfRangeError(CsvTableError, IndexError):
    """Raised by the index-checked accessors of Row and Table."""

    def __init__(self, kind: str, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Index {index} out of range of the {kind} ({count} items)")
