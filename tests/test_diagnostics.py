import pytest

from bongoquery.diagnostics import (
    ErrorLocation,
    extract_error_location,
    format_script_error,
    infer_column_type,
    is_unique_non_empty,
    resolve_data_directory,
)
from bongoquery.script_loader import SqlStatement


def test_extract_location_found():
    assert extract_error_location("Parse error at line 2, column 7") == ErrorLocation(2, 7)


def test_extract_location_case_insensitive_and_spacing():
    assert extract_error_location("bad LINE 3 , COLUMN 4 here") == ErrorLocation(3, 4)


def test_extract_location_missing():
    assert extract_error_location("Unknown table: users") is None


def test_format_without_location_uses_statement_start():
    stmt = SqlStatement("SELECT 1", 4, 9)
    assert format_script_error(stmt, "Unknown table: x") == (
        f"Error at Ln {stmt.start_line}, Col {stmt.start_column}: Unknown table: x"
    )


def test_format_first_line_offsets_column():
    stmt = SqlStatement("SELECT", 3, 5)
    result = format_script_error(stmt, "Unexpected token at line 1, column 4")
    assert result == "Error at Ln 3, Col 8: Unexpected token"


def test_format_later_line_keeps_column():
    stmt = SqlStatement("SELECT", 3, 5)
    result = format_script_error(stmt, "Unexpected token at line 2, column 6")
    assert result == "Error at Ln 4, Col 6: Unexpected token"


def test_format_location_without_at_keeps_message():
    stmt = SqlStatement("SELECT", 1, 1)
    result = format_script_error(stmt, "oops line 1, column 1")
    assert result.endswith(": oops line 1, column 1")


def test_resolve_existing_data_dir(tmp_path):
    (tmp_path / "data").mkdir()
    assert resolve_data_directory(tmp_path) == tmp_path / "data"


def test_resolve_parent_data_dir(tmp_path):
    (tmp_path / "data").mkdir()
    child = tmp_path / "child"
    child.mkdir()
    result = resolve_data_directory(child)
    assert result.resolve() == (tmp_path / "data").resolve()


def test_resolve_creates_data_dir(tmp_path):
    base = tmp_path / "fresh"
    base.mkdir()
    result = resolve_data_directory(base)
    assert result == base / "data"
    assert result.is_dir()


def test_resolve_fails_when_data_is_file(tmp_path):
    base = tmp_path / "sub"
    base.mkdir()
    (base / "data").write_text("x")
    with pytest.raises(OSError, match="Cannot create data directory"):
        resolve_data_directory(base)


def test_infer_int_column():
    rows = [{"id": "1"}, {"id": "-2"}, {"id": ""}, {"other": "x"}]
    assert infer_column_type("id", rows) == "INT"


def test_infer_text_column():
    rows = [{"name": "1"}, {"name": "alice"}]
    assert infer_column_type("name", rows) == "VARCHAR(255)"


def test_infer_decimal_is_text():
    assert infer_column_type("price", [{"price": "1.5"}]) == "VARCHAR(255)"


def test_infer_empty_rows_is_int():
    assert infer_column_type("id", []) == "INT"


def test_unique_non_empty_true():
    assert is_unique_non_empty("id", [{"id": "1"}, {"id": "2"}]) is True


def test_unique_non_empty_no_rows():
    assert is_unique_non_empty("id", []) is False


def test_unique_non_empty_duplicate():
    assert is_unique_non_empty("id", [{"id": "1"}, {"id": "1"}]) is False


def test_unique_non_empty_blank_or_missing():
    assert is_unique_non_empty("id", [{"id": "1"}, {"id": ""}]) is False
    assert is_unique_non_empty("id", [{"id": "1"}, {"name": "a"}]) is False