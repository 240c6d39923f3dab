"""Assembly printer for decoded instructions.

Emits the canonical source form (``jio a, +2``) that the decoder reads
back to an equal instruction.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Union, overload

from turinglock.model.instructions import (
    Half,
    Increment,
    Instruction,
    Jump,
    JumpIfEven,
    JumpIfOne,
    Triple,
)


def _offset(value: int) -> str:
    return f"{value:+d}"


def _write_register_op(instr: Union[Half, Triple, Increment]) -> str:
    return f"{instr.kind} {instr.reg.value}"


def _write_jump(instr: Jump) -> str:
    return f"jmp {_offset(instr.offset)}"


def _write_conditional_jump(instr: Union[JumpIfEven, JumpIfOne]) -> str:
    return f"{instr.kind} {instr.reg.value}, {_offset(instr.offset)}"


_WRITERS: dict[str, Callable[[Instruction], str]] = {
    "hlf": _write_register_op,
    "tpl": _write_register_op,
    "inc": _write_register_op,
    "jmp": _write_jump,
    "jie": _write_conditional_jump,
    "jio": _write_conditional_jump,
}


@overload
def to_assembly(target: Instruction) -> str: ...
@overload
def to_assembly(target: list[Instruction]) -> str: ...


def to_assembly(target: Instruction | list[Instruction]) -> str:
    """Render one instruction, or a list of them one per line."""
    if isinstance(target, list):
        return "\n".join(_WRITERS[instr.kind](instr) for instr in target)
    return _WRITERS[target.kind](target)
