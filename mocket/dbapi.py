"""A small DB-API style interface over the fake driver."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import islice
from typing import Any

from .driver import FakeConn
from .response import catcher
from .rows import RowsCursor

_EXEC_COMMANDS = frozenset({"INSERT", "UPDATE", "DELETE"})


def connect(database: str) -> Connection:
    """Register the fake driver if needed and open a connection to ``database``."""
    catcher.register()
    return Connection(catcher.driver.open(database))


class Connection:
    """A connection whose queries are answered by the mock catcher."""

    def __init__(self, driver_conn: FakeConn) -> None:
        self._driver_conn = driver_conn

    @property
    def closed(self) -> bool:
        return self._driver_conn.db is None

    def cursor(self) -> Cursor:
        if self.closed:
            raise RuntimeError("connection is closed")
        return Cursor(self)

    def commit(self) -> None:
        """Commit the open transaction, if there is one."""
        tx = self._driver_conn.current_tx
        if tx is not None:
            tx.commit()

    def rollback(self) -> None:
        """Roll back the open transaction, if there is one."""
        tx = self._driver_conn.current_tx
        if tx is not None:
            tx.rollback()

    def close(self) -> None:
        self._driver_conn.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class Cursor:
    """Executes statements and reads back their rows."""

    arraysize = 1

    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self.description: tuple[tuple[Any, ...], ...] | None = None
        self.rowcount = -1
        self.lastrowid: int | None = None
        self._rows: RowsCursor | None = None
        self._closed = False

    def execute(self, operation: str, parameters: Sequence[Any] = ()) -> Cursor:
        """Run one statement; INSERT, UPDATE and DELETE return no rows."""
        if self._closed:
            raise RuntimeError("cursor is closed")
        driver_conn = self.connection._driver_conn
        if driver_conn.db is None:
            raise RuntimeError("connection is closed")

        args = list(parameters or ())
        stmt = driver_conn.prepare(operation)
        try:
            expected = stmt.num_input()
            if expected != len(args):
                raise ValueError(f"sql: expected {expected} arguments, got {len(args)}")
            self._discard_rows()
            if stmt.command in _EXEC_COMMANDS:
                result = stmt.exec(args)
                self.description = None
                self.rowcount = result.rows_affected
                self.lastrowid = result.last_insert_id
            else:
                self._rows = stmt.query(args)
                self.description = tuple(
                    (name, None, None, None, None, None, None) for name in self._rows.columns()
                )
                self.rowcount = -1
                self.lastrowid = None
        finally:
            stmt.close()
        return self

    def _discard_rows(self) -> None:
        if self._rows is not None:
            self._rows.close()
            self._rows = None

    def _result_rows(self) -> RowsCursor:
        if self._rows is None:
            raise RuntimeError("no result set to fetch from")
        return self._rows

    def fetchone(self) -> tuple[Any, ...] | None:
        return self._result_rows().next()

    def fetchmany(self, size: int | None = None) -> list[tuple[Any, ...]]:
        count = self.arraysize if size is None else size
        return list(islice(iter(self._result_rows()), count))

    def fetchall(self) -> list[tuple[Any, ...]]:
        return list(self._result_rows())

    def close(self) -> None:
        self._discard_rows()
        self._closed = True

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self._result_rows())

    def __enter__(self) -> Cursor:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()