"""
Parser and writer for delimiter-separated text.

Reading: file text -> split on row delimiter -> split each line on field
delimiter -> Row -> Table. Writing runs the same path backwards.

Key invariant: file operations never raise on I/O problems. They return
None/False and leave the cause on ``CsvParser.last_error``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO

from .config import get_config
from .errors import CsvTableError, FileOpenError, StreamWriteError
from .table import Row, Table

logger = logging.getLogger(__name__)


class CsvParser:
    """Converts between delimited text files and Tables.

    Two field-splitting conventions are available:

    - strict (default): a field starts right after the previous delimiter
      ends, so the result matches ``str.split``.
    - legacy (``legacy_offsets=True``): the scan used by earlier releases.
      The first search starts at 0, every later search one character past
      the previous delimiter's start, and a field starts one past that start
      except while the previous delimiter sat at position 0. For ";b;c" this
      yields ["", ";b", "c"], and multi-character delimiters leak all but
      their first character into the next field.
    """

    def __init__(
        self,
        field_delimiter: str | None = None,
        row_delimiter: str | None = None,
        *,
        file_name: str | None = None,
        legacy_offsets: bool | None = None,
        encoding: str | None = None,
    ):
        cfg = get_config()
        self._set_delimiters(
            cfg.delimiters.field if field_delimiter is None else field_delimiter,
            cfg.delimiters.row if row_delimiter is None else row_delimiter,
        )
        self._file_name = cfg.io.default_file if file_name is None else file_name
        self._legacy_offsets = cfg.parse.legacy_offsets if legacy_offsets is None else legacy_offsets
        self._encoding = cfg.io.encoding if encoding is None else encoding
        self.last_error: CsvTableError | None = None

    @property
    def field_delimiter(self) -> str:
        return self._field_delimiter

    @property
    def row_delimiter(self) -> str:
        return self._row_delimiter

    @property
    def file_name(self) -> str:
        """File read by read_row()."""
        return self._file_name

    @property
    def legacy_offsets(self) -> bool:
        return self._legacy_offsets

    def _set_delimiters(self, field_delimiter: str, row_delimiter: str) -> None:
        if not field_delimiter:
            raise ValueError("Field delimiter must not be empty")
        if not row_delimiter:
            raise ValueError("Row delimiter must not be empty")
        self._field_delimiter = field_delimiter
        self._row_delimiter = row_delimiter

    def parse_line(self, line: str) -> Row:
        """Split one line of text into a Row on the field delimiter."""
        if self._legacy_offsets:
            fields = self._split_legacy(line)
        else:
            fields = self._split_strict(line)
        for value in fields:
            logger.debug("field = %r", value)
        return Row(fields=fields)

    def _split_strict(self, line: str) -> list[str]:
        delim = self._field_delimiter
        fields: list[str] = []
        start = 0
        while True:
            found = line.find(delim, start)
            if found == -1:
                fields.append(line[start:])
                return fields
            fields.append(line[start:found])
            start = found + len(delim)

    def _split_legacy(self, line: str) -> list[str]:
        delim = self._field_delimiter
        fields: list[str] = []
        last = 0
        search_from = 0
        seen_delimiter = False
        while True:
            found = line.find(delim, search_from)
            if found == -1:
                # Last field in the row
                fields.append(line[last + 1:] if seen_delimiter else line)
                return fields
            if last == 0:
                fields.append(line[:found])
            else:
                fields.append(line[last + 1:found])
            seen_delimiter = True
            last = found
            search_from = last + 1

    def parse_text(self, text: str) -> Table:
        """
        Split a whole buffer into a Table.

        Stops at the first empty line. That drops a trailing row delimiter,
        but a blank line in the middle also ends the table there.
        """
        table = Table()
        delim = self._row_delimiter
        pos = 0
        while pos < len(text):
            found = text.find(delim, pos)
            if found == -1:
                logger.debug("Row delimiter not found, must be last line.")
                line = text[pos:]
                pos = len(text)
            else:
                logger.debug("Row delimiter found at %d.", found)
                line = text[pos:found]
                pos = found + len(delim)

            if not line:
                logger.debug("Empty line, stopping.")
                break

            table.add(self.parse_line(line))
        return table

    def parse_file(self, file_name: str) -> Table | None:
        """Read and parse an entire file. Returns None if it can't be read."""
        self.last_error = None
        try:
            with self._open(file_name, "r", newline="") as f:
                text = f.read()
        except FileOpenError as e:
            self._fail(e)
            return None

        table = self.parse_text(text)
        logger.debug("Parsed %d rows from %s", table.count(), file_name)
        return table

    def read_row(self) -> Row | None:
        """Parse only the first line of the configured file.

        Uses ordinary line reading, so the configured row delimiter plays no
        part here.
        """
        self.last_error = None
        try:
            with self._open(self._file_name, "r") as f:
                line = f.readline()
        except FileOpenError as e:
            self._fail(e)
            return None

        if line.endswith("\n"):
            line = line[:-1]
        logger.debug("line = %r", line)
        return self.parse_line(line)

    def format_table(self, table: Table) -> str:
        """Render a table exactly as write_file() would store it."""
        return "".join(self._iter_chunks(table))

    def write_file(self, file_name: str, table: Table) -> bool:
        """
        Write a table to file_name.

        Every row, the last one included, is terminated by the row delimiter.
        A failure part way leaves the partially written file in place.
        """
        self.last_error = None
        logger.debug("Writing %d rows to %s", table.count(), file_name)
        try:
            with self._open(file_name, "w", newline="") as f:
                self._write_chunks(f, file_name, table)
        except CsvTableError as e:
            self._fail(e)
            return False
        except OSError as e:
            # raised by close() on leaving the with block
            self._fail(StreamWriteError(file_name, str(e)))
            return False
        return True

    def _write_chunks(self, f: IO[str], file_name: str, table: Table) -> None:
        for chunk in self._iter_chunks(table):
            try:
                f.write(chunk)
            except (OSError, UnicodeEncodeError) as e:
                raise StreamWriteError(file_name, str(e)) from e

    def _iter_chunks(self, table: Table) -> Iterator[str]:
        for row in table:
            last = row.count() - 1
            for i, value in enumerate(row):
                yield value
                if i != last:
                    yield self._field_delimiter
            yield self._row_delimiter

    @contextmanager
    def _open(self, file_name: str, mode: str, newline: str | None = None) -> Iterator[IO[str]]:
        """Open file_name, turning open failures into FileOpenError."""
        try:
            f = open(file_name, mode, encoding=self._encoding, newline=newline)
        except (OSError, LookupError) as e:
            raise FileOpenError(file_name, str(e)) from e
        with f:
            try:
                yield f
            except UnicodeDecodeError as e:
                raise FileOpenError(file_name, f"cannot decode as {self._encoding}") from e

    def _fail(self, error: CsvTableError) -> None:
        logger.warning("%s", error)
        self.last_error = error
