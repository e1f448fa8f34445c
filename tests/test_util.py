import pytest

from mocket.util import complete_statement, normalize


def test_normalize_collapses_spaces():
    assert normalize(" SELECT name,  age FROM users   WHERE ") == "SELECT name, age FROM users WHERE"


def test_normalize_handles_tabs_and_newlines():
    assert normalize("SELECT\n\tname\r\nFROM users") == "SELECT name FROM users"


@pytest.mark.parametrize(
    "text",
    ["SELECT name, age FROM users WHERE", "  a   b  ", "\tx\ny\n", ""],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once
    assert "  " not in once
    assert once == once.strip()


def test_complete_statement_inlines_int():
    query = "SELECT name, age FROM users WHERE age=?"
    assert complete_statement(query, [27]) == "SELECT name, age FROM users WHERE age=27"


def test_complete_statement_inlines_string():
    query = 'INSERT INTO foo VALUES("bar", ?)'
    assert complete_statement(query, ["value"]) == 'INSERT INTO foo VALUES("bar", value)'


def test_complete_statement_bytes_same_as_string():
    query = "SELECT * FROM t WHERE a = ?"
    assert complete_statement(query, [b"abc"]) == complete_statement(query, ["abc"])


def test_complete_statement_keeps_order():
    result = complete_statement("a=? AND b=?", ["first", "second"])
    assert result.index("first") < result.index("second")
    assert "?" not in result


def test_complete_statement_without_placeholder_unchanged():
    query = "SELECT * FROM foo WHERE a = $1"
    assert complete_statement(query, ["value"]) == query


def test_complete_statement_without_args_unchanged():
    query = "SELECT name FROM users WHERE age=?"
    assert complete_statement(query, []) == query
    assert complete_statement(query, None) == query


def test_complete_statement_extra_placeholders_left():
    result = complete_statement("a=? AND b=?", [27])
    assert result == "a=27 AND b=?"