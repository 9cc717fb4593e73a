# bongoquery

Helpers for the front end of a small SQL engine: the text handling that
sits between a user (or a script file) and the engine itself. There are no
runtime dependencies.

## Modules

- `bongoquery.script_loader`
  - `split_statements(sql_text)` splits SQL text on `;`. It honours
    single-quoted strings (with `''` for an embedded quote), `--` line
    comments and `/* ... */` block comments. It returns `SqlStatement`
    values (`text`, `start_line`, `start_column`, all 1-based) and raises
    `ValueError` for an unterminated string or block comment.
  - `load_statements_from_file(path)` reads and splits a file. It raises
    `FileNotFoundError` when the file cannot be read and `ValueError` when
    it holds no statements.
  - `find_default_sql_file(search_dirs)` looks for `queries.sql`. By default
    it searches the current directory and then its parent.
  - `load_default_statements()` loads the statements of that default file.
  - `load_queries(path)` returns only the statement texts.
- `bongoquery.cli_options`
  - `parse_cli_options(argv)` turns an argument vector, program name first,
    into `CliOptions` (`mode`, `program_name`, `query_text`,
    `sql_file_path`). It understands these options:
    - `-h`/`--help`
    - `-r`/`--repl`
    - `-q`/`--query <sql>` and `--query=<sql>`
    - `-f`/`--file <path>` and `--file=<path>`
  - The modes are the members of `CliMode`: `DEFAULT_SCRIPT`,
    `SCRIPT_FILE`, `SINGLE_QUERY`, `REPL` and `HELP`.
  - Unknown arguments, a missing value and conflicting modes raise
    `CliUsageError`.
  - `usage(program_name)` returns the usage text.
  - `executable_name(argv0)` returns the base name of a program path.
- `bongoquery.repl_text`
  - `normalize_repl_line(line)` removes bracketed-paste markers and `\r`.
    It also puts back a space where a clause keyword is glued to the word
    before it, for example `usernameFROM`. Text inside quotes is left alone.
  - `normalize_history_entry(sql)` collapses whitespace and adds a closing
    `;`.
  - `contains_statement_terminator(sql_text)` tells whether the text has a
    `;` outside strings and comments.
  - `strip_wrapping_quotes(value)` removes one pair of matching quotes.
- `bongoquery.line_editor`
  - `ReplLineEditor(history_path, interactive, stdin, stdout)` reads lines
    with `read_line(prompt)`, which returns `None` at end of input.
  - On a POSIX terminal it uses raw mode and supports:
    - arrow keys for history and cursor movement
    - Home, End, Delete and Backspace
    - Ctrl-C, which returns an empty line
    - Ctrl-D on an empty line, which ends input
    - bracketed paste; a multi-line paste is handed out line by line
  - History entries are appended to a file as `H|<entry>` lines through
    `add_history_entry(entry)`, and `history()` lists them.
  - `default_history_path()` gives `~/.query_engine_history`.
  - `parse_history_lines(lines)` also reads older line-by-line history files.
  - `normalize_paste(text)` turns CRLF and lone CR into LF.
- `bongoquery.meta_commands`
  - `parse_meta_command(line)` recognises the dot-commands `.help`,
    `.tables`, `.schema <table>`, `.run <file.sql>`, `.clear`, `.quit` and
    `.exit`. It returns a `ParsedMetaCommand` (`command`, `argument`), or
    `None` for an unknown command.
  - `meta_command_help()` returns the plain help text.
- `bongoquery.values`
  - `sql_quote_literal(value)` quotes a value as a SQL literal.
  - `is_integer_value(value)` and `is_numeric_value(value)` check the form
    of a value.
  - `compare_scalar(left, right)` returns -1, 0 or 1. It compares
    numerically when both values are numbers and as text otherwise.
  - `contains_case_insensitive(haystack, needle)` is a substring check that
    ignores ASCII letter case.
- `bongoquery.checks`
  - `build_enum_compact_list(values)` and
    `build_enum_predicate(column_name, values)` build the text for ENUM
    values.
  - `normalize_stored_column_check_expr(expr, column_name)` turns
    `col IN (...)` into the stored list form.
  - `dedupe_checks(checks)` and `has_table_check(checks, expr)` handle lists
    of checks.
  - `parse_fk_ref(ref)` splits `table.column` and raises `ValueError` for a
    malformed reference.
- `bongoquery.output`
  - `render_table(columns, rows)` returns an aligned text table. Headers
    lose their table qualifier, numeric columns are right-aligned, and the
    table ends with a `(N tuples)` line.
  - `render_execution_path(steps)` numbers plan steps, one per line.
  - The helpers `strip_qualifier`, `infer_numeric_columns`, `indent_lines`
    and `count_label` are public as well.
- `bongoquery.diagnostics`
  - `format_script_error(statement, message)` moves a `line N, column M`
    position inside a statement to script coordinates.
  - `extract_error_location(message)` finds that position and returns an
    `ErrorLocation`.
  - `resolve_data_directory(base)` finds `data/` or `../data/`, and creates
    `data/` when neither exists.
  - `infer_column_type(column, rows)` returns `INT` or `VARCHAR(255)`.
  - `is_unique_non_empty(column, rows)` tells whether a column is present,
    non-empty and distinct in every row.

## Examples

```python
from bongoquery.script_loader import split_statements

for statement in split_statements("SELECT * FROM users; -- done\nSELECT 1;"):
    print(statement.start_line, statement.text)
```

```python
from bongoquery.cli_options import CliUsageError, parse_cli_options, usage

try:
    options = parse_cli_options(["query_engine", "--file", "queries.sql"])
except CliUsageError as error:
    print(error)
    print(usage("query_engine"))
```

```python
from bongoquery.repl_text import contains_statement_terminator, normalize_repl_line

normalize_repl_line("SELECT usernameFROM users")  # "SELECT username FROM users"
contains_statement_terminator("SELECT ';'")       # False
contains_statement_terminator("SELECT 1;")        # True
```

```python
from bongoquery.values import compare_scalar, sql_quote_literal

compare_scalar("10", "9")        # 1
compare_scalar("apple", "pear")  # -1
sql_quote_literal("O'Brien")     # "'O''Brien'"
```

```python
from bongoquery.output import render_table

print(render_table(["users.id", "users.name"], [["1", "ada"], ["2", "grace"]]))
```

## What it does not do

This package does not parse, plan or execute SQL. It does not store tables,
and it keeps no metadata catalog. It installs no command: `parse_cli_options`
and `parse_meta_command` describe what was asked for, but nothing here carries
it out. Those parts are left to the engine that uses these helpers.

## Tests

Install the `test` extra, then run `pytest` from the project directory.