"""Command-line option parsing for the query engine."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

DEFAULT_PROGRAM_NAME = "query_engine"


class CliMode(Enum):
    """How the engine should run."""

    DEFAULT_SCRIPT = "default_script"
    SCRIPT_FILE = "script_file"
    SINGLE_QUERY = "single_query"
    REPL = "repl"
    HELP = "help"


@dataclass
class CliOptions:
    """Options gathered from the command line."""

    mode: CliMode = CliMode.DEFAULT_SCRIPT
    program_name: str = DEFAULT_PROGRAM_NAME
    query_text: str = ""
    sql_file_path: str = ""


class CliUsageError(ValueError):
    """Raised when the command line cannot be understood."""


def executable_name(argv0: str | None) -> str:
    """Return the base name of the program path, or the default name."""
    if argv0 is None:
        return DEFAULT_PROGRAM_NAME
    slash = max(argv0.rfind("/"), argv0.rfind("\\"))
    if slash < 0:
        return argv0 or DEFAULT_PROGRAM_NAME
    return argv0[slash + 1:] or DEFAULT_PROGRAM_NAME


def _ensure_mode_unset(options: CliOptions, flag: str) -> None:
    if options.mode is not CliMode.DEFAULT_SCRIPT:
        raise CliUsageError(
            f"Conflicting mode: '{flag}' cannot be combined with another execution mode."
        )


def parse_cli_options(argv: Sequence[str] | None = None) -> CliOptions:
    """Parse a full argument vector (program name first) into options."""
    if argv is None:
        argv = sys.argv
    options = CliOptions(program_name=executable_name(argv[0] if argv else None))

    args = iter(argv[1:])
    for arg in args:
        if arg in ("-h", "--help"):
            options.mode = CliMode.HELP
            return options

        if arg in ("-r", "--repl"):
            _ensure_mode_unset(options, arg)
            options.mode = CliMode.REPL
        elif arg in ("-q", "--query"):
            _ensure_mode_unset(options, arg)
            options.mode = CliMode.SINGLE_QUERY
            options.query_text = _require_value(args, arg)
        elif arg.startswith("--query="):
            _ensure_mode_unset(options, "--query")
            options.mode = CliMode.SINGLE_QUERY
            options.query_text = arg[len("--query="):]
        elif arg in ("-f", "--file"):
            _ensure_mode_unset(options, arg)
            options.mode = CliMode.SCRIPT_FILE
            options.sql_file_path = _require_value(args, arg)
        elif arg.startswith("--file="):
            _ensure_mode_unset(options, "--file")
            options.mode = CliMode.SCRIPT_FILE
            options.sql_file_path = arg[len("--file="):]
        else:
            raise CliUsageError(f"Unknown argument: {arg}")

    return options


def _require_value(args, flag: str) -> str:
    value = next(args, None)
    if value is None:
        raise CliUsageError(f"Missing value after {flag}.")
    return value


def usage(program_name: str) -> str:
    """Return the usage text for the given program name."""
    p = program_name
    return (
        "Usage:\n"
        f"  {p}                    Run queries.sql in batch mode\n"
        f"  {p} --file <path>      Run SQL script file\n"
        f'  {p} --query "<sql>"   Run a single SQL string\n'
        f"  {p} --repl             Start interactive SQL terminal\n"
        f"  {p} --help             Show this help\n"
    )