"""Mocked responses and the catcher that matches queries against them."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .util import complete_statement, normalize

DRIVER_NAME = "MOCK_FAKE_DRIVER"

GLOBAL = 0
TESTSUITE = 1
TESTCASE = 2

logger = logging.getLogger(__name__)


class NoResponseMatchError(LookupError):
    """Raised when no mock matches a query and the catcher is told to fail."""


def _deep_equal(left: Any, right: Any) -> bool:
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            _deep_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict):
        return left.keys() == right.keys() and all(
            _deep_equal(left[key], right[key]) for key in left
        )
    return left == right


@dataclass(eq=False)
class FakeResponse:
    """A mocked reply together with the rules for when it applies."""

    pattern: str = ""
    match_priority: int = GLOBAL
    strict: bool = False
    args: list[Any] | None = None
    response: list[dict[str, Any]] = field(default_factory=list)
    once: bool = False
    triggered: bool = False
    expected_triggered_times: int = 0
    triggered_times: int = 0
    callback: Callable[[str, list[Any]], None] | None = None
    rows_affected: int = 0
    last_insert_id: int = 0
    error: BaseException | None = None
    hook_query_bad_connection: Callable[[], bool] | None = None
    hook_exec_bad_connection: Callable[[], bool] | None = None
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def _is_args_match(self, args: Sequence[Any]) -> bool:
        with self._lock:
            return self.args is None or _deep_equal(self.args, list(args))

    def _is_query_match(self, query: str) -> bool:
        with self._lock:
            if not self.pattern:
                return True
            if self.strict:
                return query == self.pattern
            return self.pattern in query

    def is_match(self, query: str, args: Sequence[Any] | None) -> bool:
        """Whether this mock answers the query with these arguments."""
        with self._lock:
            if self.once and self.triggered:
                return False
        return self._is_query_match(query) and self._is_args_match(args or ())

    def mark_as_triggered(self) -> None:
        """Record that the mock was used; a one-time mock is then spent."""
        with self._lock:
            self.triggered = True

    def with_query(self, query: str) -> FakeResponse:
        with self._lock:
            self.pattern = normalize(query)
        return self

    def strict_match(self) -> FakeResponse:
        with self._lock:
            self.strict = True
        return self

    def with_args(self, *args: Any) -> FakeResponse:
        with self._lock:
            if args:
                self.args = list(args)
        return self

    def with_reply(self, response: list[dict[str, Any]]) -> FakeResponse:
        with self._lock:
            self.response = response
        return self

    def one_time(self) -> FakeResponse:
        with self._lock:
            self.once = True
        return self

    def with_exec_exception(self) -> FakeResponse:
        self.hook_exec_bad_connection = lambda: True
        return self

    def with_query_exception(self) -> FakeResponse:
        self.hook_query_bad_connection = lambda: True
        return self

    def with_callback(self, callback: Callable[[str, list[Any]], None]) -> FakeResponse:
        self.callback = callback
        return self

    def with_rows_num(self, num: int) -> FakeResponse:
        self.rows_affected = num
        return self

    def with_id(self, insert_id: int) -> FakeResponse:
        self.last_insert_id = insert_id
        return self

    def with_error(self, error: BaseException) -> FakeResponse:
        self.error = error
        return self

    def with_expected_trigger_times(self, expected: int) -> FakeResponse:
        self.expected_triggered_times = expected
        return self

    def with_match_priority(self, priority: int) -> FakeResponse:
        self.match_priority = priority
        return self


class MockCatcher:
    """Holds every mock and records the queries it has seen."""

    def __init__(self) -> None:
        self.mocks: list[FakeResponse] = []
        self.received_queries: dict[str, int] = {}
        self.no_matching_queries: dict[str, int] = {}
        self.logging = False
        self.panic_on_empty_response = False
        self.driver: Any = None
        self._lock = threading.RLock()

    def set_logging(self, logging: bool) -> None:
        with self._lock:
            self.logging = logging

    def register(self) -> None:
        """Create the fake driver once; later calls leave it in place."""
        with self._lock:
            if self.driver is None:
                from .driver import FakeDriver

                self.driver = FakeDriver()

    def attach(self, responses: Sequence[FakeResponse]) -> None:
        """Add ready-made mocks, normalising their patterns."""
        with self._lock:
            for response in responses:
                response.pattern = normalize(response.pattern)
                self.mocks.append(response)

    def find_response(self, query: str, args: Sequence[Any] | None) -> FakeResponse:
        """Return the best mock for the query, or an empty reply if none fits."""
        args = list(args or ())
        with self._lock:
            query = normalize(query)
            full_query = complete_statement(query, args)
            self.received_queries[full_query] = self.received_queries.get(full_query, 0) + 1

            self.mocks.sort(key=lambda mock: (-mock.match_priority, -len(mock.pattern)))

            for response in self.mocks:
                if response.is_match(query, args):
                    if self.logging:
                        logger.info(
                            "mock_catcher: [MATCHED QUERY]: %s matches mock {pattern: %s, args: %s}",
                            full_query,
                            response.pattern,
                            response.args,
                        )
                    response.mark_as_triggered()
                    response.triggered_times += 1
                    return response

            self.no_matching_queries[full_query] = self.no_matching_queries.get(full_query, 0) + 1
            if self.logging:
                logger.info("mock_catcher: [NO MATCHED QUERY]: %s doesn't match anything", full_query)
            if self.panic_on_empty_response:
                raise NoResponseMatchError(f"No responses matches query {full_query} ")
            return FakeResponse()

    def new_mock(self) -> FakeResponse:
        """Create, store and return an empty mock for chained configuration."""
        with self._lock:
            response = FakeResponse()
            self.mocks.append(response)
            return response

    def expectation_of_triggered_times_is_met(self) -> tuple[bool, list[str]]:
        """Check every mock with an expected count; return success and the failures."""
        with self._lock:
            messages = [
                f"We are expecting {mock.pattern} to be triggered "
                f"{mock.expected_triggered_times} times, but got {mock.triggered_times}"
                for mock in self.mocks
                if mock.expected_triggered_times
                and mock.expected_triggered_times != mock.triggered_times
            ]
        return not messages, messages

    def find_received_query(self, query: str) -> tuple[bool, int]:
        with self._lock:
            return query in self.received_queries, self.received_queries.get(query, 0)

    def find_no_matching_query(self, query: str) -> tuple[bool, int]:
        with self._lock:
            return query in self.no_matching_queries, self.no_matching_queries.get(query, 0)

    def reset(self) -> MockCatcher:
        """Drop all mocks and recorded queries."""
        with self._lock:
            self.mocks = []
            self.received_queries = {}
            self.no_matching_queries = {}
        return self


catcher = MockCatcher()