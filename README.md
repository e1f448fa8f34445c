# mocket

`mocket` is a fake SQL database for tests. Your code runs its queries against
a stand-in instead of a real server. You register canned replies ("mocks") for
the queries you expect. Afterwards you can ask which queries arrived, which of
them matched no mock, and how often each mock fired.

## Installing

```
pip install mocket
```

To run the test suite as well:

```
pip install "mocket[test]"
pytest
```

## Mocks

A `MockCatcher` (in `mocket.response`) holds the mocks. The module also has a
shared instance, `mocket.response.catcher`. Statements run through the fake
driver and through `mocket.dbapi` are answered by that shared instance, so
register your mocks there.

`new_mock()` adds an empty `FakeResponse` and returns it. You then configure
the response by chaining its methods:

```python
from mocket.response import catcher

catcher.reset().new_mock().with_query("SELECT name, age FROM users WHERE").with_reply(
    [{"name": "FirstLast", "age": "30"}]
)

response = catcher.find_response("SELECT name, age FROM users WHERE age=?", [27])
print(response.response)  # [{'name': 'FirstLast', 'age': '30'}]
```

`attach(responses)` adds `FakeResponse` objects you have built yourself.
`reset()` removes every mock and every recorded query, and returns the catcher.

### How matching works

- The query and the pattern are both normalised before they are compared.
  Leading and trailing whitespace is stripped, and each run of whitespace
  becomes a single space (`mocket.util.normalize`).
- By default a pattern matches any query that contains it. An empty pattern
  matches every query. Call `strict_match()` to require the whole query to be
  equal to the pattern.
- `with_args(*args)` also requires the bound parameters to be equal to the
  given values. The values must also be of the same type.
- When several mocks match, the one with the highest `match_priority` wins
  (`with_match_priority`; the constants `GLOBAL`, `TESTSUITE` and `TESTCASE`
  are 0, 1 and 2). If priorities are equal, the mock with the longest pattern
  wins.
- `one_time()` makes a mock match only once.
- If no mock matches, an empty `FakeResponse` is returned. If the catcher's
  `panic_on_empty_response` is set, `NoResponseMatchError` is raised instead.
- With `set_logging(True)`, every match and every miss is logged at INFO level
  on the `mocket.response` logger.

### Other response settings

| Method | Effect |
| --- | --- |
| `with_reply(rows)` | rows (a list of dicts) returned to queries |
| `with_id(n)` | last insert id for `INSERT`; when it is not set, a random id is used |
| `with_rows_num(n)` | affected row count for `UPDATE` and `DELETE` |
| `with_error(exc)` | the statement raises `exc` |
| `with_query_exception()` | row-returning queries raise `BadConnectionError` |
| `with_exec_exception()` | `INSERT`/`UPDATE`/`DELETE` raise `BadConnectionError` |
| `with_callback(fn)` | `fn(query, args)` is called when the mock fires |
| `with_expected_trigger_times(n)` | the mock is expected to fire exactly `n` times |

When several rows are returned, the columns are the union of the keys of all
rows, in the order the keys first appear. A row with no value for a column
gives `None`.

### Checking what happened

- `find_received_query(query)` returns `(seen, times)` for a query that
  arrived. The query is given with its `?` parameters filled in, for example
  `SELECT name, age FROM users WHERE age=27`.
- `find_no_matching_query(query)` does the same for queries that no mock
  matched.
- `expectation_of_triggered_times_is_met()` checks every mock that has an
  expected trigger count. It returns `(ok, messages)`, with one message for
  each mock whose count was not met.

## Using it as a database

`mocket.dbapi` offers a small DB-API–style interface. Pass the connection to
the code under test in place of a real one:

```python
from mocket.dbapi import connect

with connect("connection_string") as conn:  # any name will do
    with conn.cursor() as cur:
        cur.execute("SELECT name, age FROM users WHERE age=?", (27,))
        rows = cur.fetchall()
```

- Statements that start with `INSERT`, `UPDATE` or `DELETE` return no rows.
  They set `rowcount` and `lastrowid` instead (an `INSERT` counts as one
  affected row). Every other statement is treated as a query. Its rows are
  read with `fetchone()`, `fetchmany(size)`, `fetchall()` or by iterating the
  cursor, and the column names are in `description`.
- Both `?` and Postgres-style `$1` placeholders are counted. If the number of
  parameters differs from the number of placeholders, `ValueError` is raised.
- A database name that contains `readOnly` gives a read-only connection.
  Writing through such a connection raises `PermissionError`.

## Lower-level pieces

- `mocket.driver`: `FakeDriver.open(name)` returns a `FakeConn`. Each name has
  one `FakeDB`. `FakeConn.begin()` starts a `FakeTx`, and a second call while a
  transaction is open raises `RuntimeError`. `FakeConn.prepare(query)` returns
  a `FakeStmt`.
- `mocket.statement`: `FakeStmt.exec(args)` and `FakeStmt.query(args)`,
  `BadConnectionError` and `StatementClosedError`. `FakeTx.commit()` and
  `rollback()` raise `BadConnectionError` when the class-level hooks
  `FakeTx.hook_bad_commit` / `FakeTx.hook_bad_rollback` return true.
- `mocket.rows`: `RowsCursor`, which iterates over one or more result sets, and
  `col_type_to_python_type`.
- `mocket.result`: `FakeResult`.

## What it does not do

`mocket` stores no data and runs no SQL. Every reply comes from a mock you
registered. `FakeDB.tables` exists but is never filled, so nothing written by
an `INSERT` can be read back. The package has no command-line program.