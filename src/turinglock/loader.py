"""Program loading from text and files."""

from __future__ import annotations

import os
from pathlib import Path

from turinglock.model.program import Program


def parse_program(text: str) -> Program:
    """Split program text into one line per instruction.

    Lines end at ``\\n``; one trailing ``\\r`` is removed from each line.
    A final newline does not produce an extra empty line.  Other control
    characters (form feed, vertical tab, Unicode separators) stay inside
    their line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return Program.from_lines(line[:-1] if line.endswith("\r") else line for line in lines)


def read_program(path: str | os.PathLike[str]) -> Program:
    """Read a program file (UTF-8, one instruction per line)."""
    with Path(path).open(encoding="utf-8", newline="") as f:
        return parse_program(f.read())
