"""
Table model for csvtable.

A Table is an ordered list of Rows, a Row an ordered list of text fields.
Rows in one table may have different lengths.

Key invariant: a Table owns its rows. ``add`` stores a copy and ``get``
hands out a copy, so no caller ever holds a live reference obtained through
those two calls. The index operator is the one exception and returns the
stored row itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .errors import IndexOutOfRangeError


@dataclass
class Row:
    """One record: an ordered sequence of text fields."""
    fields: list[str] = field(default_factory=list)
    capacity: int = field(default=0, compare=False)  # initial size only, never enforced

    def __post_init__(self):
        self.fields = list(self.fields)
        if not self.fields and self.capacity > 0:
            self.fields = [""] * self.capacity

    def get(self, index: int) -> str | None:
        """Return the field at index, or None if there is none."""
        if 0 <= index < len(self.fields):
            return self.fields[index]
        return None

    def add(self, value: str) -> bool:
        self.fields.append(value)
        return True

    def remove(self, index: int) -> bool:
        """Remove the field at index, shifting later fields down."""
        if not 0 <= index < len(self.fields):
            return False
        del self.fields[index]
        return True

    def count(self) -> int:
        return len(self.fields)

    def clear(self) -> None:
        self.fields.clear()

    def copy(self) -> Row:
        # capacity is set after construction so an emptied row stays empty
        clone = Row(fields=list(self.fields))
        clone.capacity = self.capacity
        return clone

    def __getitem__(self, index: int) -> str:
        self._check(index)
        return self.fields[index]

    def __setitem__(self, index: int, value: str) -> None:
        self._check(index)
        self.fields[index] = value

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self.fields):
            raise IndexOutOfRangeError("row", index, len(self.fields))


@dataclass
class Table:
    """A parsed file: an ordered sequence of Rows."""
    rows: list[Row] = field(default_factory=list)
    capacity: int = field(default=0, compare=False)

    def __post_init__(self):
        self.rows = [row.copy() for row in self.rows]
        if not self.rows and self.capacity > 0:
            self.rows = [Row() for _ in range(self.capacity)]

    @classmethod
    def from_lists(cls, data: Iterable[Iterable[str]]) -> Table:
        """Build a table from plain lists of fields."""
        return cls(rows=[Row(fields=list(values)) for values in data])

    def to_lists(self) -> list[list[str]]:
        return [list(row.fields) for row in self.rows]

    def get(self, index: int) -> Row | None:
        """Return a copy of the row at index, or None if there is none."""
        if 0 <= index < len(self.rows):
            return self.rows[index].copy()
        return None

    def add(self, row: Row) -> bool:
        self.rows.append(row.copy())
        return True

    def remove(self, index: int) -> bool:
        if not 0 <= index < len(self.rows):
            return False
        del self.rows[index]
        return True

    def count(self) -> int:
        return len(self.rows)

    def clear(self) -> None:
        self.rows.clear()

    def copy(self) -> Table:
        clone = Table(rows=self.rows)
        clone.capacity = self.capacity
        return clone

    def __getitem__(self, index: int) -> Row:
        """Index-checked access to the stored row (not a copy)."""
        if not 0 <= index < len(self.rows):
            raise IndexOutOfRangeError("table", index, len(self.rows))
        return self.rows[index]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)
