import datetime
from typing import Optional

import pytest

from mocket.rows import CursorClosedError, RowsCursor, col_type_to_python_type

ROWS = [("FirstLast", "30"), ("Other", "50")]


def make_cursor(**kwargs):
    return RowsCursor(["name", "age"], [ROWS], **kwargs)


def test_next_returns_rows_then_none():
    cursor = make_cursor()
    assert cursor.next() == ROWS[0]
    assert cursor.next() == ROWS[1]
    assert cursor.next() is None
    assert cursor.next() is None


def test_iteration_yields_all_rows():
    assert list(make_cursor()) == ROWS


def test_columns():
    assert make_cursor().columns() == ["name", "age"]


def test_closed_cursor_raises():
    cursor = make_cursor()
    cursor.close()
    assert cursor.closed
    with pytest.raises(CursorClosedError, match="cursor is closed"):
        cursor.next()


def test_error_position():
    failure = RuntimeError("broken")
    cursor = make_cursor(err_pos=1, err=failure)
    assert cursor.next() == ROWS[0]
    with pytest.raises(RuntimeError) as info:
        cursor.next()
    assert info.value is failure


def test_multiple_result_sets():
    second = [("x",)]
    cursor = RowsCursor(["name"], [[("a",)], second])
    assert cursor.has_next_result_set()
    assert cursor.next() == ("a",)
    assert cursor.next_result_set() is True
    assert list(cursor) == second
    assert not cursor.has_next_result_set()
    assert cursor.next_result_set() is False


def test_next_result_set_skips_remaining_rows():
    cursor = RowsCursor(["n"], [[(1,), (2,)], [(3,)]])
    assert cursor.next() == (1,)
    cursor.next_result_set()
    assert cursor.next() == (3,)


def test_bytearray_values_are_cloned_and_spoiled_on_close():
    original = bytearray(b"xy")
    cursor = RowsCursor(["data"], [[(original,), (original,)]])
    (first,) = cursor.next()
    (second,) = cursor.next()
    assert first == original
    assert first is not original
    assert second is first
    original[0] = 0
    assert first != original
    cursor.close()
    assert first[0] == 255


def test_empty_result_sets():
    assert RowsCursor([], []).next() is None


def test_column_type_scan_type():
    cursor = RowsCursor(["a", "b"], [[]], column_types=[["int64", "nullstring"]])
    assert cursor.column_type_scan_type(0) is int
    assert cursor.column_type_scan_type(1) == Optional[str]


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("bool", bool),
        ("int32", int),
        ("string", str),
        ("float64", float),
        ("datetime", datetime.datetime),
        ("nullfloat64", Optional[float]),
    ],
)
def test_col_type_to_python_type(name, expected):
    assert col_type_to_python_type(name) == expected


def test_col_type_invalid():
    with pytest.raises(ValueError, match="invalid fakedb column type of decimal"):
        col_type_to_python_type("decimal")