"""Scalar value helpers: SQL quoting, numeric detection and comparison."""

from __future__ import annotations

import re
from decimal import Decimal

_INTEGER = re.compile(r"[+-]?[0-9]+")
_NUMERIC = re.compile(r"[+-]?([0-9]+(\.[0-9]+)?|\.[0-9]+)")

_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)


def sql_quote_literal(value: str) -> str:
    """Wrap the value in single quotes, doubling any embedded quote."""
    return "'" + value.replace("'", "''") + "'"


def is_integer_value(value: str) -> bool:
    """Tell whether the text is an optionally signed run of decimal digits."""
    return _INTEGER.fullmatch(value) is not None


def is_numeric_value(value: str) -> bool:
    """Tell whether the text is an optionally signed decimal number.

    Accepted forms are ``12``, ``12.5`` and ``.5``, each with an optional sign;
    exponents and a trailing point are not.
    """
    return _NUMERIC.fullmatch(value) is not None


def compare_scalar(left: str, right: str) -> int:
    """Compare two values, numerically when both are numbers.

    Returns -1, 0 or 1. Values that are not both numeric are compared as text.
    """
    if is_numeric_value(left) and is_numeric_value(right):
        lv, rv = Decimal(left), Decimal(right)
    else:
        lv, rv = left, right  # type: ignore[assignment]
    if lv < rv:
        return -1
    if lv > rv:
        return 1
    return 0


def _ascii_upper(text: str) -> str:
    return text.translate(_ASCII_UPPER)


def contains_case_insensitive(haystack: str, needle: str) -> bool:
    """Tell whether needle occurs in haystack, ignoring ASCII letter case."""
    return _ascii_upper(needle) in _ascii_upper(haystack)