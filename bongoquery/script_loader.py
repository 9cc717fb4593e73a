"""Splitting SQL script text into statements and loading script files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

DEFAULT_SQL_FILE = "queries.sql"

_WHITESPACE = " \t\n\r\f\v"


@dataclass(frozen=True)
class SqlStatement:
    """One statement of a script and where it starts (1-based line and column)."""

    text: str
    start_line: int = 1
    start_column: int = 1


def split_statements(sql_text: str) -> list[SqlStatement]:
    """Split SQL text on ';', honouring quoted strings and comments.

    Single-quoted literals (with '' as an embedded quote), ``--`` line comments
    and ``/* */`` block comments are understood. Comments are dropped, but the
    newlines inside them are kept once a statement has begun.
    """
    statements: list[SqlStatement] = []
    current: list[str] = []
    in_string = False
    in_line_comment = False
    in_block_comment = False

    line = 1
    column = 1
    start: tuple[int, int] | None = None

    def advance(ch: str) -> None:
        nonlocal line, column
        if ch == "\n":
            line += 1
            column = 1
        else:
            column += 1

    def mark_start() -> None:
        nonlocal start
        if start is None:
            start = (line, column)

    def flush() -> None:
        nonlocal start
        text = "".join(current).strip(_WHITESPACE)
        if text and start is not None:
            statements.append(SqlStatement(text, start[0], start[1]))
        current.clear()
        start = None

    length = len(sql_text)
    i = 0
    while i < length:
        c = sql_text[i]
        nxt = sql_text[i + 1] if i + 1 < length else ""

        if in_line_comment:
            if c == "\n":
                in_line_comment = False
                if start is not None:
                    current.append(c)
            advance(c)
            i += 1
            continue

        if in_block_comment:
            if c == "*" and nxt == "/":
                in_block_comment = False
                advance(c)
                advance(nxt)
                i += 2
                continue
            if c == "\n" and start is not None:
                current.append(c)
            advance(c)
            i += 1
            continue

        if in_string:
            mark_start()
            current.append(c)
            advance(c)
            if c == "'":
                if nxt == "'":
                    current.append(nxt)
                    advance(nxt)
                    i += 2
                    continue
                in_string = False
            i += 1
            continue

        if c == "'":
            mark_start()
            in_string = True
            current.append(c)
            advance(c)
            i += 1
            continue
        if c == "-" and nxt == "-":
            in_line_comment = True
            advance(c)
            advance(nxt)
            i += 2
            continue
        if c == "/" and nxt == "*":
            in_block_comment = True
            advance(c)
            advance(nxt)
            i += 2
            continue
        if c == ";":
            flush()
            advance(c)
            i += 1
            continue

        if c not in _WHITESPACE:
            mark_start()
        current.append(c)
        advance(c)
        i += 1

    if in_string:
        raise ValueError("Unterminated string literal in SQL file")
    if in_block_comment:
        raise ValueError("Unterminated block comment in SQL file")
    flush()
    return statements


def load_statements_from_file(path: str | Path) -> list[SqlStatement]:
    """Read a SQL script file and split it into statements."""
    if not str(path):
        raise ValueError("SQL file path cannot be empty.")
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise FileNotFoundError(f"Cannot open SQL file: {path}") from exc
    statements = split_statements(content)
    if not statements:
        raise ValueError(f"No executable SQL statements found in: {path}")
    return statements


def find_default_sql_file(search_dirs: Iterable[str | Path] | None = None) -> Path:
    """Return the first readable queries.sql in the given directories.

    By default the current directory and its parent are searched.
    """
    dirs = (".", "..") if search_dirs is None else search_dirs
    for directory in dirs:
        candidate = Path(directory) / DEFAULT_SQL_FILE
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(
        "Cannot find queries.sql. Create it in the project root or next to the executable."
    )


def load_default_statements() -> list[SqlStatement]:
    """Load statements from the default queries.sql file."""
    return load_statements_from_file(find_default_sql_file())


def load_queries(path: str | Path | None = None) -> list[str]:
    """Return the statement texts of a script, the default one when no path is given."""
    statements = (
        load_default_statements() if path is None else load_statements_from_file(path)
    )
    return [statement.text for statement in statements]