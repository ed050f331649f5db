"""A table-driven DFA that checks lines of a small drawing-command language."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional, Sequence, TextIO, Union

NSTATES = 14
START = 0
ACCEPT = 12
ERROR = 13

# Longest chunk read as one line, leaving room for a terminator.
MAX_LINE = 512

_NEWLINE = ord("\n")

Table = list[list[int]]


class DfaError(Exception):
    """The transition table is broken; carries the position where it showed."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


def build_table() -> Table:
    """Build the transition table: NSTATES rows of 256 entries."""
    table = [[ERROR] * 256 for _ in range(NSTATES)]

    def set_(state: int, char: str, target: int) -> None:
        table[state][ord(char)] = target

    set_(START, " ", START)
    set_(START, "\n", ACCEPT)

    # "go", possibly repeated
    set_(START, "g", 1)
    set_(1, "o", 2)
    set_(2, "\n", ACCEPT)
    set_(2, " ", START)

    # dx=<number> and dy=<number>
    set_(START, "d", 3)
    set_(3, "x", 4)
    set_(3, "y", 4)
    set_(4, "=", 5)
    set_(5, "-", 6)
    for digit in "0123456789":
        set_(5, digit, 7)
        set_(6, digit, 7)
        set_(7, digit, 7)
    set_(7, "\n", ACCEPT)
    set_(7, " ", START)

    # labels
    for digit in "0123456789":
        set_(START, digit, 8)
        set_(8, digit, 8)
    set_(8, ":", 9)
    set_(9, " ", START)

    # comments
    set_(START, "/", 10)
    set_(10, "/", 11)
    table[11][:255] = [11] * 255
    set_(11, "\n", ACCEPT)
    return table


def _as_bytes(line: Union[str, bytes]) -> bytes:
    return line.encode("utf-8") if isinstance(line, str) else line


def check_line(table: Sequence[Sequence[int]], line: Union[str, bytes]) -> Optional[int]:
    """Run one line through the DFA.

    Returns None if the line is accepted, otherwise the byte position where
    the DFA entered the ERROR state. Raises DfaError if the table misbehaves.
    """
    data = _as_bytes(line)
    state = START
    pos = 0
    while True:
        c = data[pos] if pos < len(data) else 0
        if c == 0:
            c = _NEWLINE
        state = table[state][c]

        if state < 0 or state >= NSTATES:
            raise DfaError(f"DFS entered an invalid state: {state}", pos)
        if state == ACCEPT:
            if c == _NEWLINE:
                return None
            raise DfaError("ACCEPT state reached before end of line:", pos)
        if c == _NEWLINE and state != ERROR:
            raise DfaError(
                f"Line ended without reaching either ACCEPT or ERROR state: {state}", pos
            )
        if state == ERROR:
            return pos
        pos += 1


def _chunks(lines: Iterable[Union[str, bytes]]):
    for line in lines:
        data = _as_bytes(line)
        if not data:
            continue
        for start in range(0, len(data), MAX_LINE - 1):
            yield data[start : start + MAX_LINE - 1]


def _report_error(out: TextIO, line_num: int, chunk: bytes, pos: int) -> None:
    text = chunk.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    out.write(f"line {line_num:4d}: error: {text}")
    out.write("~" * (18 + pos) + "^\n")


def validate(lines: Iterable[Union[str, bytes]], out: TextIO) -> None:
    """Check each line and report to ``out``.

    Accepted lines are echoed; rejected lines are shown with a marker under
    the offending character. A broken table is reported and DfaError raised.
    """
    table = build_table()
    for line_num, chunk in enumerate(_chunks(lines), start=1):
        try:
            pos = check_line(table, chunk)
        except DfaError as exc:
            out.write(f"fatal error: {exc.message}\n")
            _report_error(out, line_num, chunk, exc.position)
            raise
        if pos is None:
            body = chunk.split(b"\0", 1)[0].split(b"\n", 1)[0]
            out.write(f"line {line_num:4d}: accepted: {body.decode('utf-8', errors='replace')}\n")
        else:
            _report_error(out, line_num, chunk, pos)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Validate lines from standard input; return the exit status."""
    parser = argparse.ArgumentParser(
        description="Validate drawing commands read from stdin, line by line."
    )
    parser.parse_args(argv)
    print("Table filled!")
    try:
        validate(sys.stdin.buffer, sys.stdout)
    except DfaError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())