"""Decoder: one raw program line to one typed instruction.

Decoding is table-driven.  ``_OPCODES`` maps each mnemonic to its
instruction class and the ordered operand kinds it takes; ``_OPERANDS``
maps each kind to the model field it fills and the parser for its token.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from turinglock.model.instructions import (
    Half,
    Increment,
    Instruction,
    Jump,
    JumpIfEven,
    JumpIfOne,
    Triple,
)
from turinglock.model.program import Program
from turinglock.model.registers import Register

from ._registers import MachineError


class DecodeError(MachineError):
    """A program line could not be decoded into an instruction."""

    def __init__(self, line: str, reason: str, index: int | None = None):
        self.line = line
        self.reason = reason
        self.index = index
        loc = f" at instruction {index}" if index is not None else ""
        super().__init__(f"Cannot decode {line!r}{loc}: {reason}")


class _OperandError(ValueError):
    """Internal: an operand token failed to parse."""


# ---------------------------------------------------------------------------
# Operand parsers
# ---------------------------------------------------------------------------

_OFFSET_RE = re.compile(r"[+-][0-9]+")


def _parse_register(token: str) -> Register:
    try:
        return Register(token)
    except ValueError:
        raise _OperandError(f"unknown register {token!r}") from None


def _parse_offset(token: str) -> int:
    if not _OFFSET_RE.fullmatch(token):
        raise _OperandError(
            f"malformed offset {token!r} (expected a sign followed by ASCII digits)"
        )
    return int(token)


# Operand kind -> (model field name, token parser)
_OPERANDS: dict[str, tuple[str, Callable[[str], object]]] = {
    "register": ("reg", _parse_register),
    "offset": ("offset", _parse_offset),
}


# Opcode -> (instruction class, operand kinds in source order)
_OPCODES: dict[str, tuple[type, tuple[str, ...]]] = {
    "hlf": (Half, ("register",)),
    "tpl": (Triple, ("register",)),
    "inc": (Increment, ("register",)),
    "jmp": (Jump, ("offset",)),
    "jie": (JumpIfEven, ("register", "offset")),
    "jio": (JumpIfOne, ("register", "offset")),
}


def _strip_separator(token: str) -> str:
    if token.endswith(","):
        return token[:-1]
    return token


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def decode(line: str, index: int | None = None) -> Instruction:
    """Decode a single program line.

    *index* is the line's position in the program; it only feeds the
    error message.

    Raises
    ------
    DecodeError
        Empty line, unknown opcode, wrong operand count, unknown
        register, or malformed offset.
    """
    tokens = line.split()
    if not tokens:
        raise DecodeError(line, "empty instruction", index)

    opcode, *operands = tokens
    entry = _OPCODES.get(opcode)
    if entry is None:
        raise DecodeError(
            line,
            f"unknown opcode {opcode!r}. Supported: {sorted(_OPCODES)}",
            index,
        )

    cls, kinds = entry
    if len(operands) != len(kinds):
        raise DecodeError(
            line,
            f"{opcode} takes {len(kinds)} operand(s) ({', '.join(kinds)}), "
            f"got {len(operands)}",
            index,
        )

    kwargs: dict[str, object] = {}
    for kind, token in zip(kinds, operands):
        field_name, parse = _OPERANDS[kind]
        try:
            kwargs[field_name] = parse(_strip_separator(token))
        except _OperandError as exc:
            raise DecodeError(line, str(exc), index) from None
    return cls(**kwargs)


def decode_program(program: Program) -> list[Instruction]:
    """Decode every line of *program*, failing on the first bad line."""
    return [decode(line, index) for index, line in enumerate(program)]
