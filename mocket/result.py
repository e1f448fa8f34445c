"""Result of a statement that does not return rows."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FakeResult:
    """The id of an inserted record and the count of affected rows."""

    last_insert_id: int | None = None
    rows_affected: int = 0