"""Helpers for normalising query text and inlining arguments."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

_WHITESPACE = re.compile(r"[\t\n\f\r ]+")


def normalize(origin: str) -> str:
    """Trim the query and collapse every run of whitespace into one space."""
    return _WHITESPACE.sub(" ", origin.strip())


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if value is None:
        return "<nil>"
    return str(value)


def complete_statement(statement: str, args: Sequence[Any] | None) -> str:
    """Replace each ``?`` placeholder, in order, with the text of its argument."""
    if "?" not in statement or not args:
        return statement
    for value in args:
        statement = statement.replace("?", _format_value(value), 1)
    return statement