"""Cursor over mocked result rows."""

from __future__ import annotations

import datetime
from collections.abc import Iterator, Sequence
from typing import Any, Optional


class CursorClosedError(RuntimeError):
    """Raised when a closed cursor is read."""

    def __init__(self) -> None:
        super().__init__("fake_db_driver: cursor is closed")


_COLUMN_TYPES: dict[str, Any] = {
    "bool": bool,
    "nullbool": Optional[bool],
    "int32": int,
    "string": str,
    "nullstring": Optional[str],
    "int64": int,
    "nullint64": Optional[int],
    "float64": float,
    "nullfloat64": Optional[float],
    "datetime": datetime.datetime,
}


def col_type_to_python_type(typ: str) -> Any:
    """Map a fake column type name to the Python type its values scan into."""
    try:
        return _COLUMN_TYPES[typ]
    except KeyError:
        raise ValueError(f"invalid fakedb column type of {typ}") from None


class RowsCursor:
    """Iterates over one or more result sets of rows."""

    def __init__(
        self,
        columns: Sequence[str],
        result_sets: Sequence[Sequence[Sequence[Any]]],
        column_types: Sequence[Sequence[str]] | None = None,
        err_pos: int = -1,
        err: BaseException | None = None,
    ) -> None:
        self._columns = list(columns)
        self._result_sets = [list(result_set) for result_set in result_sets]
        self._column_types = [list(types) for types in column_types or ()]
        self._err_pos = err_pos
        self._err = err
        self._pos_set = 0
        self._pos_row = -1
        self._closed = False
        self._clones: dict[int, tuple[bytearray, bytearray]] = {}

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the cursor; byte buffers handed out are spoiled on first close."""
        if not self._closed:
            for _, clone in self._clones.values():
                if clone:
                    clone[0] = 255
        self._closed = True

    def columns(self) -> list[str]:
        return self._columns

    def column_type_scan_type(self, index: int) -> Any:
        return col_type_to_python_type(self._column_types[self._pos_set][index])

    def _clone(self, value: Any) -> Any:
        if not isinstance(value, bytearray):
            return value
        entry = self._clones.get(id(value))
        if entry is None:
            entry = (value, bytearray(value))
            self._clones[id(value)] = entry
        return entry[1]

    def next(self) -> tuple[Any, ...] | None:
        """Return the next row of the current result set, or None at its end."""
        if self._closed:
            raise CursorClosedError()
        self._pos_row += 1
        if self._pos_row == self._err_pos and self._err is not None:
            raise self._err
        if not self._result_sets:
            return None
        rows = self._result_sets[self._pos_set]
        if self._pos_row >= len(rows):
            return None
        return tuple(self._clone(value) for value in rows[self._pos_row])

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        while (row := self.next()) is not None:
            yield row

    def has_next_result_set(self) -> bool:
        return self._pos_set < len(self._result_sets) - 1

    def next_result_set(self) -> bool:
        """Move to the next result set; return False if there is none."""
        if self.has_next_result_set():
            self._pos_set += 1
            self._pos_row = -1
            return True
        return False