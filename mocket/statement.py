"""Prepared statements and transactions of the fake driver."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .response import catcher
from .result import FakeResult
from .rows import RowsCursor

_MAX_INSERT_ID = 1 << 63


class BadConnectionError(ConnectionError):
    """Raised to emulate a broken connection to the database."""

    def __init__(self, message: str = "driver: bad connection") -> None:
        super().__init__(message)


class StatementClosedError(RuntimeError):
    """Raised when a closed statement is executed."""

    def __init__(self) -> None:
        super().__init__("fake_db_driver: statement has been closed")


@dataclass(eq=False)
class FakeStmt:
    """A statement bound to a connection, answered from the mock catcher."""

    connection: Any
    sql: str
    command: str = ""
    placeholders: int = 0
    next_stmt: FakeStmt | None = None
    closed: bool = False
    column_names: list[str] = field(default_factory=list)

    def close(self) -> None:
        """Close the statement and any statement chained after it."""
        if self.connection is None:
            raise RuntimeError("nil conn in FakeStmt.close")
        if self.connection.db is None:
            raise RuntimeError("in FakeStmt.close, conn's db is None (already closed)")
        self.closed = True
        if self.next_stmt is not None:
            self.next_stmt.close()

    def exec(self, args: Sequence[Any]) -> FakeResult:
        """Run a statement that returns no rows, such as INSERT or UPDATE."""
        if self.closed:
            raise StatementClosedError()
        if self.connection.read_only:
            raise PermissionError("writing to read only connection")

        args = list(args)
        reply = catcher.find_response(self.sql, args)

        hook = reply.hook_exec_bad_connection
        if hook is not None and hook():
            raise BadConnectionError()
        if reply.error is not None:
            raise reply.error
        if reply.callback is not None:
            reply.callback(self.sql, args)

        if self.command == "INSERT":
            insert_id = reply.last_insert_id or random.randrange(_MAX_INSERT_ID)
            return FakeResult(last_insert_id=insert_id, rows_affected=1)
        if self.command in ("UPDATE", "DELETE"):
            return FakeResult(rows_affected=reply.rows_affected)
        raise ValueError(f"unimplemented statement Exec command type of {self.command!r}")

    def query(self, args: Sequence[Any]) -> RowsCursor:
        """Run a statement that returns rows, such as SELECT."""
        if self.closed:
            raise StatementClosedError()

        args = list(args)
        from .util import complete_statement

        self.sql = complete_statement(self.sql, args)
        reply = catcher.find_response(self.sql, args)

        hook = reply.hook_query_bad_connection
        if hook is not None and hook():
            raise BadConnectionError()
        if reply.error is not None:
            raise reply.error

        columns = list(dict.fromkeys(name for record in reply.response for name in record))
        rows = [tuple(record.get(name) for name in columns) for record in reply.response]
        cursor = RowsCursor(columns, [rows])

        if reply.callback is not None:
            reply.callback(self.sql, args)
        return cursor

    def num_input(self) -> int:
        """Number of placeholders found in the statement."""
        return self.placeholders


@dataclass(eq=False)
class FakeTx:
    """A transaction on a fake connection."""

    hook_bad_commit: ClassVar[Callable[[], bool] | None] = None
    hook_bad_rollback: ClassVar[Callable[[], bool] | None] = None

    connection: Any

    def commit(self) -> None:
        """End the transaction; the commit hook may report a broken connection."""
        self.connection.current_tx = None
        hook = type(self).hook_bad_commit
        if hook is not None and hook():
            raise BadConnectionError()

    def rollback(self) -> None:
        """End the transaction; the rollback hook may report a broken connection."""
        self.connection.current_tx = None
        hook = type(self).hook_bad_rollback
        if hook is not None and hook():
            raise BadConnectionError()