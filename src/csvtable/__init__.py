"""
csvtable - read and write delimiter-separated text tables.
"""

from .errors import CsvTableError, FileOpenError, IndexOutOfRangeError, StreamWriteError
from .parser import CsvParser
from .table import Row, Table

__all__ = [
    "CsvParser",
    "CsvTableError",
    "FileOpenError",
    "IndexOutOfRangeError",
    "Row",
    "StreamWriteError",
    "Table",
]

__version__ = "1.0.0"
