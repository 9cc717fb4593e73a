"""CHECK constraint text helpers: enum lists, stored forms and FK references."""

from __future__ import annotations

import re
from typing import Iterable

from bongoquery.values import sql_quote_literal

_WHITESPACE = " \t\n\r\f\v"


def _trim(text: str) -> str:
    return text.strip(_WHITESPACE)


def build_enum_compact_list(values: Iterable[str]) -> str:
    """Return the enum values as a comma-separated list of quoted literals."""
    return ", ".join(sql_quote_literal(value) for value in values)


def build_enum_predicate(column_name: str, values: Iterable[str]) -> str:
    """Return a ``column IN (...)`` predicate over the enum values."""
    return f"{column_name} IN ({build_enum_compact_list(values)})"


def normalize_stored_column_check_expr(expr: str, column_name: str) -> str:
    """Return the stored form of a column CHECK.

    A check of the form ``<column> IN (<list>)`` (any case for IN) is stored
    as just the list; anything else is stored trimmed.
    """
    trimmed = _trim(expr)
    pattern = re.compile(
        r"\s*" + re.escape(column_name) + r"\s+IN\s*\((.*)\)\s*",
        re.IGNORECASE,
    )
    match = pattern.fullmatch(trimmed)
    if match is not None:
        return _trim(match.group(1))
    return trimmed


def dedupe_checks(checks: Iterable[str]) -> list[str]:
    """Trim the checks, drop empty ones and repeats, keeping first-seen order."""
    seen: set[str] = set()
    deduped: list[str] = []
    for raw in checks:
        normalized = _trim(raw)
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        deduped.append(normalized)
    return deduped


def has_table_check(checks: Iterable[str], expr: str) -> bool:
    """Tell whether the expression, trimmed, is already among the checks."""
    normalized = _trim(expr)
    return any(_trim(existing) == normalized for existing in checks)


def parse_fk_ref(ref: str) -> tuple[str, str]:
    """Split a ``table.column`` foreign-key reference at its first '.'."""
    table, dot, column = ref.partition(".")
    if not dot or not table or not column:
        raise ValueError(f"Invalid FK format (expected table.column): {ref}")
    return table, column