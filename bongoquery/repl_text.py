"""Text clean-up helpers for interactive SQL input."""

from __future__ import annotations

import re

_WHITESPACE = " \t\n\r\f\v"
_WHITESPACE_RUN = re.compile(r"[ \t\n\r\f\v]+")

_PASTE_MARKERS = ("\x1b[200~", "\x1b[201~")

_CLAUSE_KEYWORDS = (
    "FROM", "WHERE", "GROUP", "ORDER", "HAVING", "JOIN", "LEFT", "RIGHT",
    "FULL", "INNER", "CROSS", "LIMIT", "UNION", "EXISTS", "SELECT", "PATH",
    "ON", "BY", "AND", "OR",
)


def _is_word_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def _keyword_starts_at(line: str, pos: int) -> bool:
    for keyword in _CLAUSE_KEYWORDS:
        candidate = line[pos:pos + len(keyword)]
        if len(candidate) != len(keyword) or not candidate.isascii():
            continue
        if candidate.upper() != keyword:
            continue
        end = pos + len(keyword)
        if end < len(line) and _is_word_char(line[end]):
            continue
        return True
    return False


def normalize_repl_line(line: str) -> str:
    """Clean a line read in the REPL.

    Bracketed-paste markers and carriage returns are removed, and a space is
    put back between an identifier (or ')') and a clause keyword glued to it.
    Quoted text is left alone.
    """
    for marker in _PASTE_MARKERS:
        line = line.replace(marker, "")
    line = line.replace("\r", "")

    repaired: list[str] = []
    in_quote = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "'":
            repaired.append(ch)
            if in_quote:
                if i + 1 < len(line) and line[i + 1] == "'":
                    repaired.append("'")
                    i += 1
                else:
                    in_quote = False
            else:
                in_quote = True
            i += 1
            continue

        if not in_quote and repaired:
            prev = repaired[-1]
            if (_is_word_char(prev) or prev == ")") and _keyword_starts_at(line, i):
                repaired.append(" ")

        repaired.append(ch)
        i += 1
    return "".join(repaired)


def normalize_history_entry(sql: str) -> str:
    """Collapse whitespace to single spaces and make sure the entry ends with ';'."""
    compact = _WHITESPACE_RUN.sub(" ", sql).strip(_WHITESPACE)
    if compact and not compact.endswith(";"):
        compact += ";"
    return compact


def contains_statement_terminator(sql_text: str) -> bool:
    """Tell whether the text holds a ';' outside strings and comments."""
    in_string = False
    in_line_comment = False
    in_block_comment = False
    i = 0
    length = len(sql_text)
    while i < length:
        c = sql_text[i]
        nxt = sql_text[i + 1] if i + 1 < length else ""
        if in_line_comment:
            if c == "\n":
                in_line_comment = False
        elif in_block_comment:
            if c == "*" and nxt == "/":
                in_block_comment = False
                i += 1
        elif in_string:
            if c == "'" and nxt == "'":
                i += 1
            elif c == "'":
                in_string = False
        elif c == "'":
            in_string = True
        elif c == "-" and nxt == "-":
            in_line_comment = True
            i += 1
        elif c == "/" and nxt == "*":
            in_block_comment = True
            i += 1
        elif c == ";":
            return True
        i += 1
    return False


def strip_wrapping_quotes(value: str) -> str:
    """Remove one pair of matching single or double quotes around the value."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value