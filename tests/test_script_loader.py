import pytest

from bongoquery.script_loader import (
    SqlStatement,
    find_default_sql_file,
    load_default_statements,
    load_queries,
    load_statements_from_file,
    split_statements,
)


def _offset(sql, statement):
    lines = sql.split("\n")
    before = sum(len(text) + 1 for text in lines[: statement.start_line - 1])
    return before + statement.start_column - 1


def test_split_two_statements():
    result = split_statements("SELECT 1; SELECT 2;")
    assert [s.text for s in result] == ["SELECT 1", "SELECT 2"]


def test_trailing_statement_without_semicolon():
    result = split_statements("SELECT 1;\nSELECT 2")
    assert [s.text for s in result] == ["SELECT 1", "SELECT 2"]


def test_semicolon_inside_string_is_not_a_boundary():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT 1"
    result = split_statements(sql)
    assert [s.text for s in result] == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_doubled_quote_is_kept():
    sql = "SELECT 'it''s;here';"
    result = split_statements(sql)
    assert [s.text for s in result] == ["SELECT 'it''s;here'"]


def test_line_comment_is_dropped():
    sql = "-- comment; still comment\nSELECT 1;"
    result = split_statements(sql)
    assert [s.text for s in result] == ["SELECT 1"]


def test_block_comment_is_dropped():
    result = split_statements("SELECT /* ; */ 1;")
    assert [s.text for s in result] == ["SELECT  1"]


def test_newline_in_comment_kept_inside_statement():
    result = split_statements("SELECT 1 -- c\nFROM t;")
    assert result[0].text == "SELECT 1 \nFROM t"


def test_empty_and_blank_input():
    assert split_statements("") == []
    assert split_statements("  ;; \n ; ") == []


def test_start_positions_point_at_statement_text():
    sql = "SELECT 1;\n\n   SELECT name\nFROM t;  'x';"
    result = split_statements(sql)
    assert len(result) == 3
    for statement in result:
        assert sql[_offset(sql, statement):].startswith(statement.text)


def test_start_position_after_comment():
    sql = "/* head */\n-- note\n  SELECT 1;"
    (statement,) = split_statements(sql)
    assert statement.start_line == 3
    assert sql[_offset(sql, statement):].startswith("SELECT 1")


def test_unterminated_string_raises():
    with pytest.raises(ValueError, match="Unterminated string literal"):
        split_statements("SELECT 'abc")


def test_unterminated_block_comment_raises():
    with pytest.raises(ValueError, match="Unterminated block comment"):
        split_statements("SELECT 1; /* open")


def test_load_statements_from_file(tmp_path):
    path = tmp_path / "script.sql"
    path.write_text("SELECT 1;\nSELECT 2;\n", encoding="utf-8")
    result = load_statements_from_file(path)
    assert [s.text for s in result] == ["SELECT 1", "SELECT 2"]
    assert result[0] == SqlStatement("SELECT 1", 1, 1)


def test_load_statements_from_empty_file_raises(tmp_path):
    path = tmp_path / "empty.sql"
    path.write_text("-- nothing here\n", encoding="utf-8")
    with pytest.raises(ValueError, match="No executable SQL statements found in"):
        load_statements_from_file(path)


def test_load_statements_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError, match="Cannot open SQL file"):
        load_statements_from_file(tmp_path / "missing.sql")


def test_load_statements_empty_path_raises():
    with pytest.raises(ValueError, match="SQL file path cannot be empty"):
        load_statements_from_file("")


def test_find_default_sql_file_searches_in_order(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    (second / "queries.sql").write_text("SELECT 1;", encoding="utf-8")
    assert find_default_sql_file([first, second]) == second / "queries.sql"
    (first / "queries.sql").write_text("SELECT 2;", encoding="utf-8")
    assert find_default_sql_file([first, second]) == first / "queries.sql"


def test_find_default_sql_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError, match="Cannot find queries.sql"):
        find_default_sql_file([tmp_path])


def test_load_default_statements_uses_current_directory(tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    (work / "queries.sql").write_text("SELECT a FROM t;", encoding="utf-8")
    monkeypatch.chdir(work)
    result = load_default_statements()
    assert [s.text for s in result] == ["SELECT a FROM t"]


def test_load_queries_returns_texts(tmp_path):
    path = tmp_path / "q.sql"
    path.write_text("SELECT 1; SELECT 'x;y';", encoding="utf-8")
    assert load_queries(path) == ["SELECT 1", "SELECT 'x;y'"]