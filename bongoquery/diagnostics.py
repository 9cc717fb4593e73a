"""Script error locations, data directory lookup and legacy CSV column inference."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from bongoquery.script_loader import SqlStatement
from bongoquery.values import is_integer_value

DATA_DIR_NAME = "data"

_LOCATION = re.compile(r"line\s+([0-9]+)\s*,\s*column\s+([0-9]+)", re.IGNORECASE)
_LOCATION_SUFFIX = re.compile(
    r"\s*at\s+line\s+[0-9]+\s*,\s*column\s+[0-9]+", re.IGNORECASE
)


@dataclass(frozen=True)
class ErrorLocation:
    """A 1-based line and column reported inside an error message."""

    line: int
    column: int


def extract_error_location(message: str) -> ErrorLocation | None:
    """Find a ``line N, column M`` position in the message, if there is one."""
    match = _LOCATION.search(message)
    if match is None:
        return None
    return ErrorLocation(int(match.group(1)), int(match.group(2)))


def format_script_error(statement: SqlStatement, message: str) -> str:
    """Describe an error at its position in the whole script.

    A position given in the message is relative to the statement; it is moved
    to script coordinates and the ``at line N, column M`` text is dropped.
    """
    line, column = statement.start_line, statement.start_column
    location = extract_error_location(message)
    if location is not None:
        line = statement.start_line + (location.line - 1)
        if location.line == 1:
            column = statement.start_column + (location.column - 1)
        else:
            column = location.column
    cleaned = _LOCATION_SUFFIX.sub("", message)
    return f"Error at Ln {line}, Col {column}: {cleaned}"


def resolve_data_directory(base: str | Path | None = None) -> Path:
    """Return the data directory next to base or in its parent, creating one if needed.

    Paths are relative to base, the current directory by default.
    """
    root = Path(".") if base is None else Path(base)
    for candidate in (root / DATA_DIR_NAME, root / ".." / DATA_DIR_NAME):
        if candidate.is_dir():
            return candidate
    fallback = root / DATA_DIR_NAME
    try:
        fallback.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OSError(f"Cannot create data directory: {exc.strerror or exc}") from exc
    return fallback


def infer_column_type(column: str, rows: Iterable[Mapping[str, str]]) -> str:
    """Return INT when every non-empty value of the column is an integer, else VARCHAR(255)."""
    for row in rows:
        value = row.get(column, "")
        if value and not is_integer_value(value):
            return "VARCHAR(255)"
    return "INT"


def is_unique_non_empty(column: str, rows: Iterable[Mapping[str, str]]) -> bool:
    """Tell whether there are rows and the column is present, non-empty and distinct in all."""
    seen: set[str] = set()
    for row in rows:
        value = row.get(column, "")
        if not value or value in seen:
            return False
        seen.add(value)
    return bool(seen)