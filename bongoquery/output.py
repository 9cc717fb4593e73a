"""Plain-text rendering of result tables, plan paths and counts."""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from bongoquery.values import is_numeric_value

_LINE = re.compile(r"[^\n]*\n|[^\n]+")


def strip_qualifier(column: str) -> str:
    """Return the part after the last '.', or the whole name when there is none."""
    return column.rpartition(".")[2]


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def infer_numeric_columns(
    columns: Sequence[str], rows: Iterable[Sequence[str]]
) -> list[bool]:
    """Tell for each column whether every non-empty value in it is numeric."""
    rows = list(rows)
    return [
        all(
            not value or is_numeric_value(value)
            for value in (_cell(row, index) for row in rows)
        )
        for index in range(len(columns))
    ]


def count_label(count: int, singular: str, plural: str) -> str:
    """Return the count followed by the singular or plural noun."""
    return f"{count} {singular if count == 1 else plural}"


def render_table(columns: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render rows under their column headers as an aligned text table.

    Headers lose their table qualifier. Numeric columns are right-aligned,
    the others left-aligned, and a tuple count closes the table.
    """
    rows = list(rows)
    if not columns:
        return "(0 tuples)\n"

    headers = [strip_qualifier(column) for column in columns]
    widths = [len(header) for header in headers]
    for row in rows:
        for index, value in enumerate(row[: len(columns)]):
            widths[index] = max(widths[index], len(value))

    numeric = infer_numeric_columns(columns, rows)

    lines = [
        " | ".join(header.ljust(width) for header, width in zip(headers, widths)),
        "-+-".join("-" * width for width in widths),
    ]
    for row in rows:
        cells = []
        for index, width in enumerate(widths):
            value = _cell(row, index)
            cells.append(value.rjust(width) if numeric[index] else value.ljust(width))
        lines.append(" | ".join(cells))

    lines.append(f"({count_label(len(rows), 'tuple', 'tuples')})")
    return "\n".join(lines) + "\n"


def indent_lines(text: str, prefix: str) -> str:
    """Put the prefix before every line of the text."""
    return "".join(prefix + line for line in _LINE.findall(text))


def render_execution_path(steps: Iterable[str]) -> str:
    """Number the plan steps one per line, or say that the plan is empty."""
    numbered = [f"{number}. {step}" for number, step in enumerate(steps, start=1)]
    if not numbered:
        return "(empty plan)"
    return "\n".join(numbered)