"""Front-end helpers for a small SQL engine: script splitting, CLI options, REPL input and output formatting."""

__version__ = "1.0.0"