"""turinglock machine: fetch-decode-execute for the two-register machine.

Entry point::

    from turinglock.machine import load

    engine = load(["inc a", "jio a, +2", "tpl a", "inc a"])
    engine.run_to_completion()
    assert engine.register_value("a") == 2
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

from turinglock.loader import read_program
from turinglock.model.instructions import Instruction
from turinglock.model.program import Program
from turinglock.model.registers import MachineConfig

from ._decoder import DecodeError, decode, decode_program
from ._engine import ExecutionEngine
from ._registers import MachineError, RegisterOverflowError


class StepLimitError(MachineError):
    """The program did not halt within the allowed number of steps."""

    def __init__(self, max_steps: int, pc: int):
        self.max_steps = max_steps
        self.pc = pc
        super().__init__(f"program did not halt within {max_steps} steps (pc={pc})")


def load(source: Any, *, config: MachineConfig | None = None) -> ExecutionEngine:
    """Create an execution engine for a program.

    Parameters
    ----------
    source
        A ``Program``, a list/tuple of instruction lines, or a path to a
        program file.
    config
        Register presets and overflow policy.

    Returns
    -------
    ExecutionEngine
        A fresh engine with pc = 0, ready to ``step()`` or
        ``run_to_completion()``.
    """
    return ExecutionEngine(_resolve_program(source), config)


def run(
    source: Any,
    *,
    config: MachineConfig | None = None,
    max_steps: int | None = None,
    on_step: Callable[[int, Instruction], None] | None = None,
) -> dict[str, int]:
    """Load and run a program, returning the final register values.

    With *max_steps*, raises ``StepLimitError`` if the machine has
    executed that many instructions and still has not halted.
    *on_step* is called with (pc, instruction) before each instruction
    executes.
    """
    engine = load(source, config=config)
    while True:
        if max_steps is not None and engine.steps >= max_steps:
            if engine.program.get(engine.pc) is not None:
                raise StepLimitError(max_steps, engine.pc)
        if on_step is not None:
            instr = engine.current_instruction()
            if instr is not None:
                on_step(engine.pc, instr)
        if not engine.step():
            return engine.registers


def _resolve_program(source: Any) -> Program:
    """Resolve a load() source to a Program."""
    if isinstance(source, Program):
        return source
    if isinstance(source, (list, tuple)):
        return Program.from_lines(source)
    if isinstance(source, (str, os.PathLike)):
        return read_program(source)
    raise TypeError(
        f"load() expects a Program, a list of lines, or a path, "
        f"got {type(source).__name__}"
    )


__all__ = [
    "DecodeError",
    "ExecutionEngine",
    "MachineError",
    "RegisterOverflowError",
    "StepLimitError",
    "decode",
    "decode_program",
    "load",
    "run",
]
