"""Parsing and help text of the REPL's dot-commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bongoquery.repl_text import strip_wrapping_quotes


class MetaCommand(Enum):
    """A dot-command understood by the REPL."""

    HELP = ".help"
    QUIT = ".quit"
    CLEAR = ".clear"
    TABLES = ".tables"
    SCHEMA = ".schema"
    RUN = ".run"


_COMMAND_NAMES = {
    ".help": MetaCommand.HELP,
    ".quit": MetaCommand.QUIT,
    ".exit": MetaCommand.QUIT,
    ".clear": MetaCommand.CLEAR,
    ".tables": MetaCommand.TABLES,
    ".schema": MetaCommand.SCHEMA,
    ".run": MetaCommand.RUN,
}

_TAKES_ARGUMENT = (MetaCommand.SCHEMA, MetaCommand.RUN)

_HELP_ENTRIES = (
    (".help", "Show REPL help"),
    (".tables", "List loaded tables"),
    (".schema <table>", "Show table schema"),
    (".run <file.sql>", "Execute statements from file"),
    (".clear", "Clear terminal screen"),
    (".quit | .exit", "Exit terminal"),
)

_HELP_WIDTH = 22


@dataclass(frozen=True)
class ParsedMetaCommand:
    """A recognised dot-command and its argument (empty when it takes none)."""

    command: MetaCommand
    argument: str = ""


def parse_meta_command(line: str) -> ParsedMetaCommand | None:
    """Parse a dot-command line; return None when the command is unknown.

    The command word is case-insensitive. For .schema and .run the rest of the
    line is trimmed and one pair of wrapping quotes is removed.
    """
    parts = line.lstrip().split(maxsplit=1)
    if not parts:
        return None
    command = _COMMAND_NAMES.get(parts[0].lower())
    if command is None:
        return None
    if command not in _TAKES_ARGUMENT:
        return ParsedMetaCommand(command)
    rest = parts[1] if len(parts) > 1 else ""
    return ParsedMetaCommand(command, strip_wrapping_quotes(rest.strip()))


def meta_command_help() -> str:
    """Return the help text listing the REPL commands."""
    lines = ["REPL commands:\n"]
    for command, description in _HELP_ENTRIES:
        lines.append(f"  {command.ljust(_HELP_WIDTH)}{description}\n")
    return "".join(lines)