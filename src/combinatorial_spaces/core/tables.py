"""
Indexed Column Tables
=====================

Struct-of-arrays storage shared by every structure in core/.

A table is a set of parts (rows 0..n-1) with integer-valued columns.
Columns listed in `index` also keep an inverted index value → rows, so that
preimage queries ("half-edges of vertex v", "edges with src u") cost
O(answer) instead of O(n).

    parts:    0    1    2    3    4
    vertex:  [0,   0,   0,   1,   1]
    index:   {0: [0, 1, 2], 1: [3, 4]}
"""

from bisect import insort
from typing import Dict, Iterable, List, Sequence

import numpy as np

from ..spec.constants import INDEX_DTYPE, UNPAIRED
from ..spec.errors import check_count, check_index


class ColumnTable:
    """Append-only table of integer columns with optional inverted indices."""

    def __init__(self, name: str, columns: Sequence[str] = (),
                 index: Sequence[str] = ()):
        unknown = set(index) - set(columns)
        if unknown:
            raise ValueError(f"Cannot index unknown columns {sorted(unknown)} of {name}")
        self.name = name
        self._n = 0
        self._columns: Dict[str, List[int]] = {c: [] for c in columns}
        self._index: Dict[str, Dict[int, List[int]]] = {c: {} for c in index}

    def __len__(self) -> int:
        return self._n

    @property
    def nrows(self) -> int:
        return self._n

    @property
    def columns(self) -> tuple:
        return tuple(self._columns)

    def rows(self) -> range:
        return range(self._n)

    def check_row(self, row) -> int:
        """Return `row` as int, raising IndexOutOfRange if it is not a part."""
        return check_index(row, self._n, self.name)

    def _broadcast(self, column: str, values, n: int) -> List[int]:
        if values is None:
            return [UNPAIRED] * n
        if np.isscalar(values):
            return [int(values)] * n
        values = [int(v) for v in values]
        if len(values) != n:
            raise ValueError(
                f"Column {self.name}.{column}: expected {n} values, got {len(values)}"
            )
        return values

    def add_rows(self, n: int, **values) -> range:
        """
        Append `n` rows and return their indices.

        Each keyword names a column and gives either one value for all new
        rows or a sequence of `n` values. Missing columns are filled with
        UNPAIRED.
        """
        n = check_count(n, f"Row count for {self.name}")
        unknown = set(values) - set(self._columns)
        if unknown:
            raise ValueError(f"Unknown columns {sorted(unknown)} for {self.name}")

        # Broadcast everything first so a bad column leaves the table untouched
        filled = {c: self._broadcast(c, values.get(c), n) for c in self._columns}

        start = self._n
        for column, new in filled.items():
            self._columns[column].extend(new)
            if column in self._index:
                index = self._index[column]
                for offset, value in enumerate(new):
                    index.setdefault(value, []).append(start + offset)
        self._n += n
        return range(start, start + n)

    def add_row(self, **values) -> int:
        """Append one row and return its index."""
        return self.add_rows(1, **values)[0]

    def get(self, column: str, rows=None):
        """
        Read a column.

        rows=None returns the whole column as an array; an int returns one
        value; a sequence returns an array of the selected values.
        """
        data = self._columns[column]
        if rows is None:
            return np.array(data, dtype=INDEX_DTYPE)
        if np.isscalar(rows):
            return data[self.check_row(rows)]
        return np.array([data[self.check_row(r)] for r in rows], dtype=INDEX_DTYPE)

    def set(self, column: str, rows, values) -> None:
        """Overwrite `column` at `rows` (int or sequence), keeping the index in sync."""
        if np.isscalar(rows):
            rows, values = [rows], [values]
        rows = [self.check_row(r) for r in rows]
        values = self._broadcast(column, values, len(rows))

        data = self._columns[column]
        index = self._index.get(column)
        for row, value in zip(rows, values):
            if index is not None:
                old = data[row]
                bucket = index[old]
                bucket.remove(row)
                if not bucket:
                    del index[old]
                insort(index.setdefault(value, []), row)
            data[row] = value

    def incident(self, column: str, value: int) -> List[int]:
        """Rows whose `column` equals `value`, ascending."""
        if column in self._index:
            return list(self._index[column].get(int(value), ()))
        return [r for r, v in enumerate(self._columns[column]) if v == value]

    def is_indexed(self, column: str) -> bool:
        return column in self._index

    def copy(self) -> 'ColumnTable':
        other = ColumnTable(self.name, self.columns, tuple(self._index))
        other._n = self._n
        other._columns = {c: list(v) for c, v in self._columns.items()}
        other._index = {c: {k: list(rows) for k, rows in idx.items()}
                        for c, idx in self._index.items()}
        return other

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColumnTable):
            return NotImplemented
        return (self._n == other._n and self._columns == other._columns)

    def __repr__(self) -> str:
        return f"ColumnTable({self.name!r}, n={self._n}, columns={list(self._columns)})"


def lookup(table: ColumnTable, **values) -> List[int]:
    """
    Rows matching every `column=value` pair (relational selection).

    The most selective indexed column drives the scan; the rest are filters.

    Example:
        lookup(E, src=0, tgt=2) → edges from vertex 0 to vertex 2
    """
    if not values:
        return list(table.rows())

    indexed = [c for c in values if table.is_indexed(c)]
    if indexed:
        candidates: Iterable[int] = min(
            (table.incident(c, values[c]) for c in indexed), key=len)
    else:
        candidates = table.rows()

    return [r for r in candidates
            if all(table.get(c, r) == v for c, v in values.items())]
