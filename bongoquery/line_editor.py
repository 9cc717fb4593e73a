"""Line input for the REPL: history, pasted text and simple in-line editing."""

from __future__ import annotations

import os
import sys
from collections import deque
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

try:
    import termios
except ImportError:  # not available on this platform
    termios = None  # type: ignore[assignment]

HISTORY_FILE_NAME = ".query_engine_history"
_HISTORY_MARKER = "H|"

_ESC = "\x1b"
_CTRL_C = "\x03"
_CTRL_D = "\x04"
_BACKSPACES = ("\x7f", "\x08")
_PASTE_START = "[200~"
_PASTE_END = "[201~"


def default_history_path() -> str:
    """Return the history file in the home directory, or in the current one."""
    home = os.environ.get("HOME", "")
    if not home:
        return HISTORY_FILE_NAME
    return f"{home}/{HISTORY_FILE_NAME}"


def parse_history_lines(lines: Iterable[str]) -> list[str]:
    """Turn the lines of a history file into history entries.

    Lines marked with ``H|`` are whole entries. Older files stored dot-commands
    one per line and SQL split across lines; such SQL lines are joined with a
    space until a line holding ';' ends the statement.
    """
    history: list[str] = []
    legacy: list[str] = []
    for raw in lines:
        normalized = raw.strip()
        if not normalized:
            continue
        if normalized.startswith(_HISTORY_MARKER):
            entry = normalized[len(_HISTORY_MARKER):].strip()
            if entry:
                history.append(entry)
            continue
        if normalized.startswith("."):
            history.append(normalized)
            continue
        legacy.append(normalized)
        if ";" in normalized:
            history.append(" ".join(legacy).strip())
            legacy.clear()
    if legacy:
        history.append(" ".join(legacy).strip())
    return history


def normalize_paste(text: str) -> str:
    """Turn CRLF and lone CR line breaks into LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError, OSError):
        return False


@contextmanager
def _raw_mode(stdin: TextIO, stdout: TextIO) -> Iterator[int | None]:
    """Put the terminal in raw mode; yield its descriptor, or None if that fails."""
    if termios is None or not (_is_tty(stdin) and _is_tty(stdout)):
        yield None
        return
    try:
        fd = stdin.fileno()
        original = termios.tcgetattr(fd)
    except (AttributeError, ValueError, OSError, termios.error):
        yield None
        return

    raw = list(original)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    raw[0] &= ~(termios.ICRNL | termios.IXON)
    cc = list(raw[6])
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    raw[6] = cc
    try:
        termios.tcsetattr(fd, termios.TCSANOW, raw)
    except termios.error:
        yield None
        return
    try:
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, original)


def _byte_reader(fd: int) -> Callable[[], str]:
    def read() -> str:
        try:
            data = os.read(fd, 1)
        except OSError:
            return ""
        return data.decode("latin-1")

    return read


def _read_escape_sequence(read: Callable[[], str]) -> str:
    """Read the rest of a CSI sequence after its '['; return it with the '['."""
    seq = "["
    while True:
        part = read()
        if not part:
            break
        seq += part
        if "A" <= part <= "Z" or part == "~":
            break
    return seq


class ReplLineEditor:
    """Reads REPL lines with history, arrow-key editing and bracketed paste."""

    def __init__(
        self,
        history_path: str | Path | None = None,
        interactive: bool | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._stdin = sys.stdin if stdin is None else stdin
        self._stdout = sys.stdout if stdout is None else stdout
        if interactive is None:
            interactive = _is_tty(self._stdin) and _is_tty(self._stdout)
        self._interactive = interactive
        self._history_path = Path(
            default_history_path() if history_path is None else history_path
        )
        self._history: list[str] = []
        self._pending: deque[str] = deque()
        self._load_history()

    def history(self) -> list[str]:
        """Return a copy of the history entries, oldest first."""
        return list(self._history)

    def read_line(self, prompt: str) -> str | None:
        """Read one line after showing the prompt; None at end of input."""
        if self._interactive:
            return self._read_interactive(prompt)
        return self._read_stream(prompt)

    def add_history_entry(self, entry: str) -> None:
        """Record an entry unless it is blank or repeats the last one."""
        normalized = entry.strip()
        if not normalized:
            return
        if self._history and self._history[-1] == normalized:
            return
        self._history.append(normalized)
        try:
            with self._history_path.open("a", encoding="utf-8") as out:
                out.write(f"{_HISTORY_MARKER}{normalized}\n")
        except OSError:
            pass

    def _load_history(self) -> None:
        try:
            with self._history_path.open(encoding="utf-8", errors="replace") as f:
                self._history = parse_history_lines(f)
        except OSError:
            self._history = []

    def _pop_pending(self) -> str | None:
        return self._pending.popleft() if self._pending else None

    def _read_stream(self, prompt: str) -> str | None:
        pending = self._pop_pending()
        if pending is not None:
            return pending
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            return None
        return line[:-1] if line.endswith("\n") else line

    def _read_interactive(self, prompt: str) -> str | None:
        pending = self._pop_pending()
        if pending is not None:
            return pending
        with _raw_mode(self._stdin, self._stdout) as fd:
            if fd is None:
                return self._read_stream(prompt)
            return self._edit_line(prompt, _byte_reader(fd))

    def _edit_line(self, prompt: str, read: Callable[[], str]) -> str | None:
        out = self._stdout
        line = ""
        cursor = 0
        history_index = len(self._history)

        def redraw() -> None:
            out.write(f"\r{prompt}{line}\x1b[K")
            if cursor < len(line):
                out.write(f"\r{prompt}{line[:cursor]}")
            out.flush()

        out.write(prompt)
        out.flush()

        while True:
            ch = read()
            if not ch:
                out.write("\n")
                return None

            if ch in ("\r", "\n"):
                out.write("\n")
                return line

            if ch == _CTRL_D:
                if not line:
                    out.write("\n")
                    return None
                continue

            if ch == _CTRL_C:
                out.write("^C\n")
                return ""

            if ch in _BACKSPACES:
                if cursor > 0:
                    line = line[:cursor - 1] + line[cursor:]
                    cursor -= 1
                    redraw()
                continue

            if ch == _ESC:
                if read() != "[":
                    continue
                seq = _read_escape_sequence(read)

                if seq == "[A":
                    if history_index > 0:
                        history_index -= 1
                        line = self._history[history_index]
                        cursor = len(line)
                        redraw()
                elif seq == "[B":
                    if history_index < len(self._history):
                        history_index += 1
                        line = (
                            ""
                            if history_index == len(self._history)
                            else self._history[history_index]
                        )
                        cursor = len(line)
                        redraw()
                elif seq == "[C":
                    if cursor < len(line):
                        cursor += 1
                        redraw()
                elif seq == "[D":
                    if cursor > 0:
                        cursor -= 1
                        redraw()
                elif seq in ("[H", "[1~"):
                    cursor = 0
                    redraw()
                elif seq in ("[F", "[4~"):
                    cursor = len(line)
                    redraw()
                elif seq == "[3~":
                    if cursor < len(line):
                        line = line[:cursor] + line[cursor + 1:]
                        redraw()
                elif seq == _PASTE_START:
                    pasted = self._read_paste(read)
                    if not pasted:
                        continue
                    expanded = line[:cursor] + normalize_paste(pasted) + line[cursor:]
                    pieces = expanded.split("\n")
                    if len(pieces) == 1:
                        line = pieces[0]
                        cursor = len(line)
                        redraw()
                        continue
                    self._pending.extend(pieces[1:])
                    out.write("\n")
                    return pieces[0]
                continue

            if " " <= ch <= "~":
                line = line[:cursor] + ch + line[cursor:]
                cursor += 1
                redraw()

    @staticmethod
    def _read_paste(read: Callable[[], str]) -> str:
        """Collect pasted text up to the end-of-paste marker."""
        pasted: list[str] = []
        while True:
            pc = read()
            if not pc:
                break
            if pc == _ESC:
                pn = read()
                if not pn:
                    break
                if pn == "[" and _read_escape_sequence(read) == _PASTE_END:
                    break
                continue
            pasted.append(pc)
        return "".join(pasted)