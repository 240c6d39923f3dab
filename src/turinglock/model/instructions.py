"""Instruction nodes for the two-register machine.

The instruction set is closed: ``Instruction`` is a discriminated union
over exactly six variants, keyed on ``kind`` (the opcode mnemonic).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .registers import Register


class Half(BaseModel):
    """``hlf r``: halve *reg*, truncating."""

    kind: Literal["hlf"] = "hlf"
    reg: Register


class Triple(BaseModel):
    """``tpl r``: multiply *reg* by 3."""

    kind: Literal["tpl"] = "tpl"
    reg: Register


class Increment(BaseModel):
    """``inc r``: add 1 to *reg*."""

    kind: Literal["inc"] = "inc"
    reg: Register


class Jump(BaseModel):
    """``jmp offset``: continue at pc + *offset*."""

    kind: Literal["jmp"] = "jmp"
    offset: int


class JumpIfEven(BaseModel):
    """``jie r, offset``: jump when *reg* is even."""

    kind: Literal["jie"] = "jie"
    reg: Register
    offset: int


class JumpIfOne(BaseModel):
    """``jio r, offset``: jump when *reg* is exactly 1 (not "odd")."""

    kind: Literal["jio"] = "jio"
    reg: Register
    offset: int


Instruction = Annotated[
    Union[
        Half,
        Triple,
        Increment,
        Jump,
        JumpIfEven,
        JumpIfOne,
    ],
    Field(discriminator="kind"),
]
