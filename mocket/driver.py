"""The fake driver, its databases and its connections."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass, field
from typing import Any

from .statement import FakeStmt, FakeTx

_POSTGRES_PLACEHOLDER = re.compile(r"\$\d+")


@dataclass(eq=False)
class FakeDB:
    """A named fake database."""

    name: str
    tables: dict[str, Any] = field(default_factory=dict)
    bad_conn: bool = False


@dataclass(eq=False)
class FakeConn:
    """A connection to a fake database."""

    db: FakeDB | None
    read_only: bool = False
    current_tx: FakeTx | None = None

    def begin(self) -> FakeTx:
        """Start a transaction; only one may be open at a time."""
        if self.current_tx is not None:
            raise RuntimeError("already in a transaction")
        self.current_tx = FakeTx(self)
        return self.current_tx

    def close(self) -> None:
        self.db = None

    def prepare(self, query: str) -> FakeStmt:
        """Return a statement for the query, counting its placeholders."""
        if "$1" in query:
            marked = _POSTGRES_PLACEHOLDER.sub("$$", query)
            placeholders = len(marked.split("$$")) - 1
        else:
            placeholders = len(query.split("?")) - 1
        command = query.split(" ")[0].upper()
        return FakeStmt(self, query, command=command, placeholders=placeholders)


class FakeDriver:
    """Opens connections to fake databases, one database per name."""

    def __init__(self) -> None:
        self._dbs: dict[str, FakeDB] = {}
        self._lock = threading.Lock()

    def open(self, database: str) -> FakeConn:
        """Connect; a name containing ``readOnly`` gives a read-only connection."""
        return FakeConn(db=self._get_db(database), read_only="readOnly" in database)

    def _get_db(self, name: str) -> FakeDB:
        with self._lock:
            db = self._dbs.get(name)
            if db is None:
                db = self._dbs[name] = FakeDB(name)
            return db